from .generator import CodeGenerator, substitute
from .tree import quote

__all__ = ["CodeGenerator", "quote", "substitute"]
