"""Rule handlers that turn regex captures into CSS declarations."""

from classcraft.handlers.function import FunctionHandler
from classcraft.handlers.static import StaticHandler
from classcraft.handlers.template import TemplateHandler
from classcraft.model.rule import RuleHandler

__all__ = [
    "RuleHandler",
    "StaticHandler",
    "TemplateHandler",
    "FunctionHandler",
]
