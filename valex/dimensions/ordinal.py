from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind, TokenData, payload_as


@dataclass(frozen=True)
class OrdinalData:
    dimension: ClassVar[DimensionKind] = DimensionKind.ORDINAL

    value: int


def ordinal_data(token_data: TokenData) -> Optional[OrdinalData]:
    return payload_as(token_data, OrdinalData)


def resolve(data: OrdinalData, context, options) -> Optional[Dict[str, Any]]:
    return {"type": "value", "value": data.value}
