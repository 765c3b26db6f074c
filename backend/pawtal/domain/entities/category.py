"""Category — flat taxonomy attachable to pages and articles."""

import uuid
from dataclasses import dataclass, field


@dataclass
class Category:
    name: str
    slug: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
