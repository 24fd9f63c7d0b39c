from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Selectable:
    name: str
    options: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"Name": self.name, "Options": list(self.options)}


@dataclass
class ProductRecord:
    name: str
    category: str = ""
    features: Dict[str, str] = field(default_factory=dict)
    images: List[str] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)
    extras: List[Selectable] = field(default_factory=list)
    details: Dict[str, str] = field(default_factory=dict)
    geometry: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Output shape with capitalized field names."""
        return {
            "Name": self.name,
            "Category": self.category,
            "Features": dict(self.features),
            "Images": list(self.images),
            "Descriptions": list(self.descriptions),
            "Extras": [extra.to_dict() for extra in self.extras],
            "Details": dict(self.details),
            "Geometry": self.geometry,
        }
