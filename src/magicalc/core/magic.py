"""Magic number derivation: the difference between target and sum."""

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MagicNumber:
    """
    A derived magic number.

    Attributes:
        value: target - sum (negative when the sum overshoots the target)
        digits: Decimal digits of abs(value), most significant first
    """
    value: int
    digits: tuple[int, ...]

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    def __len__(self) -> int:
        return len(self.digits)


def decimal_digits(number: int) -> tuple[int, ...]:
    """Digits of abs(number), most significant first; (0,) for zero."""
    return tuple(int(ch) for ch in str(abs(number)))


def derive(target: int, total: int) -> MagicNumber:
    """
    Derive the magic number for a target and the audience's sum.

    Never raises. A negative result means the trick's premise is broken
    (the sum exceeds the target): a warning is logged and the digits of
    the absolute value are used, so the reveal will not match the
    displayed arithmetic.
    """
    value = target - total
    magic = MagicNumber(value=value, digits=decimal_digits(value))

    if magic.is_negative:
        logger.warning(
            f"Magic number is negative ({target} - {total} = {value}): "
            f"the sum is too large, reveal will not add up"
        )
    else:
        logger.debug(f"Magic number {value} ({len(magic)} digits)")

    return magic
