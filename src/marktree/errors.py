"""Exception classes for marktree.

Rendering itself never raises for a well-formed tree: unknown node types
fall through to structural descent and missing children degrade to empty
output (see RenderDiagnostic). The exceptions here cover programming
errors in registry construction and providers that choose to abort.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from marktree.element_types import NodeType


class MarktreeError(Exception):
    """Base exception for all marktree errors.
    
    Subclass this for specific error categories.
    """

    pass


class RegistryError(MarktreeError):
    """Error while building a provider registry.

    Raised when a node type is registered twice, or when replacing a
    provider for a node type that was never registered.
    """

    def __init__(self, node_type: NodeType, message: str) -> None:
        """Initialize registry error.

        Args:
            node_type: The node type the registration was for
            message: Description of the conflict
        """
        self.node_type = node_type
        super().__init__(f"{node_type.name}: {message}")


class RenderError(MarktreeError):
    """Error during HTML rendering.
    
    The built-in providers never raise it; custom providers may use it
    to abort a render on input they cannot handle.
    """

    pass
