from dataclasses import dataclass, asdict


# fmt: off
@dataclass(frozen=True)
class DomainCountModel:
    domain: str     # Host portion of shortened URLs (no scheme, port or path)
    count: int      # Number of distinct URLs shortened under this domain

    def to_dict(self) -> dict[str, str | int]:
        return asdict(self)
# fmt: on
