from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from ..vx_types import DimensionKind


@dataclass(frozen=True)
class UrlData:
    dimension: ClassVar[DimensionKind] = DimensionKind.URL

    value: str
    domain: str


def resolve(data: UrlData, context, options) -> Optional[Dict[str, Any]]:
    return {"type": "value", "value": data.value, "domain": data.domain}
