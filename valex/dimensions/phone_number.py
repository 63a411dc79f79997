from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind


@dataclass(frozen=True)
class PhoneNumberData:
    dimension: ClassVar[DimensionKind] = DimensionKind.PHONE_NUMBER

    value: str


def resolve(data: PhoneNumberData, context, options) -> Optional[Dict[str, Any]]:
    return {"type": "value", "value": data.value}
