"""Namespaced identifiers such as ``minecraft:overworld``."""

from __future__ import annotations

from dataclasses import dataclass

from kasumi.codec import STRING

DEFAULT_NAMESPACE = "minecraft"
"""Namespace assumed when an identifier is sent without one."""


@dataclass(frozen=True)
class Identifier:
    """A ``namespace:value`` pair, sent on the wire as a string."""

    namespace: str
    value: str

    @classmethod
    def minecraft(cls, value: str) -> Identifier:
        """Return an identifier in the default namespace."""
        return cls(DEFAULT_NAMESPACE, value)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.value}"

    @classmethod
    def read(cls, buffer) -> tuple[Identifier, int]:
        """Decode an identifier; a missing namespace means the default one."""
        raw, consumed = STRING.read(buffer)
        namespace, separator, value = raw.partition(":")
        if separator:
            return cls(namespace, value), consumed
        return cls(DEFAULT_NAMESPACE, raw), consumed

    def write(self) -> bytes:
        """Encode the identifier as a ``namespace:value`` string."""
        return STRING.write(str(self))