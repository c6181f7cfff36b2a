"""Style inference — palette, typography and elevation."""

from promptcraft.style.inferrer import infer_style
from promptcraft.style.schema import StyleSpec

__all__ = ["StyleSpec", "infer_style"]
