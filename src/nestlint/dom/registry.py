# src/nestlint/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Optional, Set

from .core import ElementNode, RuleEntry
from .contents import ContentModel
from .tags import Tag

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry of nest rules, keyed by `Tag`.

    Dynamically discovers the RuleEntry definitions in the
    'nestlint.dom.elements' package. Every tag without a definition, including
    `Tag.UNKNOWN`, gets a permissive entry, so lookups never fail.
    The table is filled once and only read afterwards.
    """

    _entries: Dict[Tag, RuleEntry] = {}
    _all_codes: Set[str] = set()
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all rule entries found in the 'nestlint.dom.elements' package.

        This method scans the package for modules exposing a `DEFINITIONS` list
        of `RuleEntry` objects and collects all possible diagnostic codes.
        """
        if cls._loaded:
            return

        entries: Dict[Tag, RuleEntry] = {}
        import nestlint.dom.elements as elements_pkg

        for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
            full_name = f"nestlint.dom.elements.{name}"
            module = importlib.import_module(full_name)
            for entry in getattr(module, "DEFINITIONS", ()):
                if not isinstance(entry, RuleEntry):
                    continue
                if entry.tag is Tag.UNKNOWN:
                    logger.warning(f"Skipping rule for unsupported tag '{entry.tag_name}' in {full_name}")
                    continue
                if entry.tag in entries:
                    logger.warning(f"Duplicate rule for <{entry.tag_name}> in {full_name}, keeping the first one")
                    continue
                entries[entry.tag] = entry
                cls._all_codes.update(entry.codes)
            logger.debug(f"Nest rules loaded: {name}")

        # Permissive default for everything left unregistered
        for tag in Tag:
            entries.setdefault(tag, RuleEntry(tag.value))

        cls._entries = entries
        cls._loaded = True
        logger.debug(f"Nest registry ready: {len(entries)} tags, {len(cls._all_codes)} codes")

    @classmethod
    def entry(cls, tag: Tag) -> RuleEntry:
        """Retrieves the rule entry for a tag (never fails)."""
        cls.discover()
        return cls._entries[tag]

    @classmethod
    def entry_for(cls, node: ElementNode) -> RuleEntry:
        return cls.entry(Tag.of(node.tag))

    @classmethod
    def content_model(cls, node: ElementNode) -> Optional[ContentModel]:
        """The registered content model of `node`'s tag, None when unconstrained."""
        return cls.entry_for(node).content

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """
        Returns a list of all unique diagnostic codes registered in the system.
        Used by the CLI for --list-codes and by the config layer for validation.
        """
        cls.discover()
        return sorted(cls._all_codes)
