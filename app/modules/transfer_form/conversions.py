# app/modules/transfer_form/conversions.py
"""Bottle / 9L case conversions. A 9L case holds 12 x 750ml or 6 x 1500ml."""

CASE_VOLUME_ML = 9000
STANDARD_VOLUMES = (750, 1500)

BOTTLES_PER_CASE = {
    750: 12,
    1500: 6,
}


class UnitConversionError(ValueError):
    """Conversion requested for a product without a usable bottle volume"""

    def __init__(self, volume_ml):
        super().__init__(f"Cannot convert between bottles and cases for volume {volume_ml!r}")
        self.volume_ml = volume_ml


def _check_volume(volume_ml):
    if not volume_ml or volume_ml <= 0:
        raise UnitConversionError(volume_ml)


def calculate_cases(bottles: float, volume_ml: int) -> float:
    _check_volume(volume_ml)
    if volume_ml in BOTTLES_PER_CASE:
        return bottles / BOTTLES_PER_CASE[volume_ml]
    return (bottles * volume_ml) / CASE_VOLUME_ML


def calculate_bottles(cases: float, volume_ml: int) -> float:
    _check_volume(volume_ml)
    if volume_ml in BOTTLES_PER_CASE:
        return cases * BOTTLES_PER_CASE[volume_ml]
    return (cases * CASE_VOLUME_ML) / volume_ml
