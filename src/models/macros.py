"""
Reference macro specification and metadata models

Defines the kinds of [[...]] cross-reference macros, the parsed form of a
macro occurrence, and the spec used by MacroRegistry to render each kind.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class MacroKind(Enum):
    """
    Kinds of reference macros

    The value is the tag written as the first macro argument. RAW is the
    fallback for any tag not listed here and has no tag of its own.
    """
    MAN = "man"            # [[man,doveadm-sync,,8]] -> doveadm-sync(8)
    SETTING = "setting"    # [[setting,mail_path]] -> `mail_path`
    RAW = ""               # [[foo,bar]] -> foo,bar

    @classmethod
    def kind_fromTag(cls, tag: str) -> "MacroKind":
        """Map a macro tag to its kind (exact, case-sensitive); unknown tags map to RAW"""
        for kind in cls:
            if kind is not cls.RAW and kind.value == tag:
                return kind
        return cls.RAW


@dataclass
class MacroCall:
    """
    One parsed [[...]] occurrence

    Attributes:
        payload: Text between the brackets, verbatim
        args: Payload split on "," with each part stripped
              (args[0] is the tag)

    Example:
        For "[[man, doveadm-sync, , 8]]":
        MacroCall(payload="man, doveadm-sync, , 8",
                  args=["man", "doveadm-sync", "", "8"])
    """
    payload: str
    args: List[str]

    @classmethod
    def macroCall_createFromPayload(cls, payload: str) -> "MacroCall":
        """Split a macro payload into stripped arguments"""
        return cls(payload=payload, args=[part.strip() for part in payload.split(",")])

    @property
    def kind(self) -> MacroKind:
        return MacroKind.kind_fromTag(self.args[0])

    def arg_get(self, index: int) -> str:
        """Positional argument, or "" when the macro has fewer arguments"""
        return self.args[index] if index < len(self.args) else ""


@dataclass
class MacroSpec:
    """
    Specification for a macro kind

    Attributes:
        kind: Macro kind handled by this spec
        description: Human-readable description
        handler: Rendering function (MacroCall) -> str
        examples: Example usage strings
    """
    kind: MacroKind
    description: str
    handler: Callable[[MacroCall], str]
    examples: List[str] = field(default_factory=list)
