from dataclasses import asdict, dataclass, field
from typing import List


@dataclass
class Product:
    name: str
    url: str
    price: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CollectionResult:
    base_url: str
    products: List[Product] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "baseUrl": self.base_url,
            "products": [p.to_dict() for p in self.products],
        }
