import enum


class OilUnit(str, enum.Enum):
    VISS = "viss"
    LITER = "liter"
    KG = "kg"
    KYAT_THAR = "kyat_thar"


class OilStatus(str, enum.Enum):
    """Lifecycle of a catalog entry: ACTIVE -> INACTIVE -> ACTIVE, never deleted."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SaleType(str, enum.Enum):
    SINGLE_OIL = "SINGLE_OIL"
    MIX = "MIX"


def enum_values(e: type[enum.Enum]) -> list[str]:
    return [m.value for m in e]
