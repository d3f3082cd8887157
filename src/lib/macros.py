"""
Reference macro implementations for mangen

Each [[kind,args...]] macro is rewritten into plain inline markdown before the
page is handed to pandoc. Uses MacroSpec for metadata and dispatch.
"""

import re
from typing import Dict, List, Optional

from ..models.macros import MacroCall, MacroKind, MacroSpec

MACRO_PATTERN = re.compile(r"\[\[(.*?)\]\]")


class MacroRegistry:
    """
    Registry of macro specifications and handlers

    Maps macro kinds to MacroSpec objects. Every kind has a spec, including
    the RAW fallback, so unknown macros are never dropped from the output.
    """

    def __init__(self) -> None:
        """Initialize the macro registry and register all built-in macro kinds"""
        self.specs: Dict[MacroKind, MacroSpec] = {}
        self.referenceMacros_register()
        self.fallbackMacro_register()

    def register(self, spec: MacroSpec) -> None:
        """Register a macro specification"""
        self.specs[spec.kind] = spec

    def spec_get(self, kind: MacroKind) -> Optional[MacroSpec]:
        """Get full macro specification by kind"""
        return self.specs.get(kind)

    def kinds_list(self) -> List[MacroKind]:
        return list(self.specs)

    def referenceMacros_register(self) -> None:
        """Register the man page and setting reference macros"""

        def man_handler(call: MacroCall) -> str:
            """Handle [[man,name,,section]] - man page reference, section defaults to 1"""
            # The third argument is positional padding and never rendered.
            section = call.arg_get(3) or "1"
            return f"{call.arg_get(1)}({section})"

        def setting_handler(call: MacroCall) -> str:
            """Handle [[setting,name]] - configuration setting in inline code"""
            return f"`{call.arg_get(1)}`"

        self.register(MacroSpec(
            kind=MacroKind.MAN,
            description="Reference to another man page",
            handler=man_handler,
            examples=["[[man,doveadm-sync]]", "[[man,doveconf,,1]]"],
        ))

        self.register(MacroSpec(
            kind=MacroKind.SETTING,
            description="Reference to a configuration setting",
            handler=setting_handler,
            examples=["[[setting,mail_location]]"],
        ))

    def fallbackMacro_register(self) -> None:
        """Register the pass-through used for unrecognized macro kinds"""

        def raw_handler(call: MacroCall) -> str:
            """Unknown kind - keep the payload text, drop the brackets"""
            return call.payload

        self.register(MacroSpec(
            kind=MacroKind.RAW,
            description="Unrecognized macro, rendered as its raw payload",
            handler=raw_handler,
            examples=["[[plugin,quota]]"],
        ))

    def macro_render(self, payload: str) -> str:
        """
        Render one macro payload

        Args:
            payload: Text between [[ and ]] (must be non-empty)

        Returns:
            Inline replacement text
        """
        call = MacroCall.macroCall_createFromPayload(payload)
        spec = self.specs.get(call.kind) or self.specs[MacroKind.RAW]
        return spec.handler(call)

    def macros_rewrite(self, text: str) -> str:
        """
        Rewrite every [[...]] macro in text in a single left-to-right pass

        Replacement text is not rescanned, and macros with an empty payload
        ([[]]) are left verbatim.

        Args:
            text: Markdown with includes already expanded

        Returns:
            Markdown with macros rendered inline
        """
        def macro_substitute(match: "re.Match[str]") -> str:
            payload = match.group(1)
            if not payload:
                return match.group(0)
            return self.macro_render(payload)

        return MACRO_PATTERN.sub(macro_substitute, text)
