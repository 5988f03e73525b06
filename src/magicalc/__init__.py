"""Magic calculator: adds two numbers, then reveals the time."""

__version__ = "1.0.0"
