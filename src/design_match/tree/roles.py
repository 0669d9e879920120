"""Semantic role inference for design and markup nodes.

Inference is symmetric: both variants go through ``infer_role`` and a
pre-declared ``semantic_role`` wins when it is recognised.  Markup nodes consult the
semantic tag table first, then keyword rules over tag and classes.
Design nodes apply the keyword rules to their author-assigned name.

Declared roles go through ``coerce_role``.  The heading variants emitted by
markup providers (``main-heading``, ``section-heading``,
``subsection-heading``) fold into ``SemanticRole.HEADING``; any other
unknown value is ignored and the role is inferred as if none were declared.
"""

from __future__ import annotations

from design_match.tree.nodes import NodeVariant, SemanticRole, TreeNode

__all__ = ["coerce_role", "infer_role"]

_SEMANTIC_TAGS: dict[str, SemanticRole] = {
    "header": SemanticRole.HEADER,
    "nav": SemanticRole.NAVIGATION,
    "main": SemanticRole.MAIN_CONTENT,
    "section": SemanticRole.SECTION,
    "article": SemanticRole.ARTICLE,
    "aside": SemanticRole.SIDEBAR,
    "footer": SemanticRole.FOOTER,
    "h1": SemanticRole.HEADING,
    "h2": SemanticRole.HEADING,
    "h3": SemanticRole.HEADING,
    "h4": SemanticRole.HEADING,
    "h5": SemanticRole.HEADING,
    "h6": SemanticRole.HEADING,
    "button": SemanticRole.INTERACTIVE,
    "a": SemanticRole.LINK,
    "form": SemanticRole.FORM,
    "img": SemanticRole.IMAGE,
}

_ROLE_ALIASES: dict[str, SemanticRole] = {
    "main-heading": SemanticRole.HEADING,
    "section-heading": SemanticRole.HEADING,
    "subsection-heading": SemanticRole.HEADING,
}

# Evaluated in order; the first rule with a matching keyword wins.
_NAME_RULES: tuple[tuple[tuple[str, ...], SemanticRole], ...] = (
    (("button", "btn"), SemanticRole.INTERACTIVE),
    (("header",), SemanticRole.HEADER),
    (("title", "heading"), SemanticRole.HEADING),
    (("card",), SemanticRole.CONTENT_CARD),
    (("nav", "menu"), SemanticRole.NAVIGATION),
)

_CLASS_RULES: tuple[tuple[tuple[str, ...], SemanticRole], ...] = (
    (("hero",), SemanticRole.HERO_SECTION),
    (("btn", "button"), SemanticRole.INTERACTIVE),
    (("card",), SemanticRole.CONTENT_CARD),
    (("list",), SemanticRole.LIST),
    (("menu", "nav"), SemanticRole.NAVIGATION),
)


def _match_rules(
    label: str, rules: tuple[tuple[tuple[str, ...], SemanticRole], ...]
) -> SemanticRole | None:
    for keywords, role in rules:
        if any(keyword in label for keyword in keywords):
            return role
    return None


def coerce_role(value: object) -> SemanticRole | None:
    """Map a declared role value onto the role vocabulary.

    Returns ``None`` for ``None`` and for values outside the vocabulary.

    Example::

        >>> coerce_role("main-heading")
        <SemanticRole.HEADING: 'heading'>
    """
    if value is None:
        return None
    if isinstance(value, SemanticRole):
        return value
    key = str(value).strip().lower()
    if key in _ROLE_ALIASES:
        return _ROLE_ALIASES[key]
    try:
        return SemanticRole(key)
    except ValueError:
        return None


def infer_role(node: TreeNode) -> SemanticRole:
    """Return the semantic role of ``node``.

    Args:
        node: A design or markup node.

    Returns:
        The declared role when it maps onto the vocabulary, otherwise the
        inferred one; ``SemanticRole.GENERIC`` when no rule applies.
    """
    declared = coerce_role(node.semantic_role)
    if declared is not None:
        return declared

    if node.variant == NodeVariant.MARKUP:
        tag = node.kind.lower()
        if tag in _SEMANTIC_TAGS:
            return _SEMANTIC_TAGS[tag]
        role = _match_rules(" ".join(node.classes).lower(), _CLASS_RULES)
        return role if role is not None else SemanticRole.GENERIC

    name = node.name.lower()
    if node.kind.upper() == "TEXT" and "title" in name:
        return SemanticRole.HEADING
    role = _match_rules(name, _NAME_RULES)
    return role if role is not None else SemanticRole.GENERIC
