from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind


@dataclass(frozen=True)
class EmailData:
    dimension: ClassVar[DimensionKind] = DimensionKind.EMAIL

    value: str


def resolve(data: EmailData, context, options) -> Optional[Dict[str, Any]]:
    return {"type": "value", "value": data.value}
