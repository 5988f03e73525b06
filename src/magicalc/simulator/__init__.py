"""Desktop host shells: pygame simulator and console."""
