"""Tree processors for folding XML into mappings and back."""

from .element_collapser import ElementCollapser
from .mapping_expander import MappingExpander

__all__ = ["ElementCollapser", "MappingExpander"]
