"""Default rule catalogs, registered in the order findings are reported."""

from .certification import CERTIFICATION
from .cover import COVER
from .subrecipient import SUBRECIPIENT
from .grants import GRANTS

__all__ = [
    "CERTIFICATION",
    "COVER",
    "SUBRECIPIENT",
    "GRANTS",
]
