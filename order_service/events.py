from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class OrderPlacedEvent:
    order_id: str

    def to_dict(self) -> dict:
        return asdict(self)
