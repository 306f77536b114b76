"""Parser - Builds expression trees from tokens."""

from . import ast_nodes
from .parser import Parser, parse
from .ast_nodes import *

__all__ = ['Parser', 'parse'] + ast_nodes.__all__
