"""
Centralized constants for smart navigation.

This module consolidates the tunable thresholds, the element and role lists
used by leaf classification, and the spoken role messages. Import from here
to keep the walkers, the description builder and the configuration layer
consistent.
"""

# =============================================================================
# Leaf Classification
# =============================================================================

# A node whose collapsed text is longer than this is never a single unit.
# Roughly the length of a long paragraph on a typical news page.
SMARTNAV_MAX_CHARCOUNT = 1500

# Element kinds that always force finer-grained navigation when a candidate
# node contains one of them with content.
SMARTNAV_BREAKOUT_TAGS: tuple[str, ...] = (
    "blockquote",
    "button",
    "code",
    "form",
    "frame",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "iframe",
    "input",
    "object",
    "ol",
    "p",
    "pre",
    "select",
    "table",
    "tr",
    "ul",
)

SMARTNAV_BREAKOUT_ROLES: tuple[str, ...] = (
    # ARIA widget roles
    "alert",
    "alertdialog",
    "button",
    "checkbox",
    "combobox",
    "dialog",
    "log",
    "marquee",
    "menubar",
    "progressbar",
    "radio",
    "radiogroup",
    "scrollbar",
    "slider",
    "spinbutton",
    "status",
    "tab",
    "tabpanel",
    "textbox",
    "toolbar",
    "tooltip",
    "treeitem",
    # ARIA structure roles
    "article",
    "document",
    "group",
    "heading",
    "img",
    "list",
    "math",
    "region",
    "row",
    "separator",
)

# =============================================================================
# Description Output
# =============================================================================

# Annotations that are folded into "<annotation> collection with <n> items".
COLLECTION_ANNOTATIONS: tuple[str, ...] = ("Link",)

# Minimum number of same-annotation records before folding kicks in.
COLLECTION_MIN_ITEMS = 3

EMPTY_CELL_MESSAGE = "empty cell"
SPANNED_CELL_MESSAGE = "spanned"

# =============================================================================
# Element Categories
# =============================================================================

# Never content, never descended into.
IGNORED_TAGS = frozenset(
    {"head", "script", "style", "template", "noscript", "title", "meta", "link"}
)

# Elements that are always a single unit, whatever their children.
LEAF_TAGS = frozenset(
    {
        "audio",
        "br",
        "canvas",
        "embed",
        "hr",
        "iframe",
        "img",
        "input",
        "math",
        "object",
        "select",
        "svg",
        "textarea",
        "video",
    }
)

# Roles that make an element a single unit.
LEAF_ROLES = frozenset(
    {
        "checkbox",
        "combobox",
        "img",
        "progressbar",
        "radio",
        "scrollbar",
        "separator",
        "slider",
        "spinbutton",
        "textbox",
    }
)

# Elements that carry content even without any text.
CONTENT_TAGS = frozenset(
    {"audio", "button", "embed", "hr", "iframe", "input", "object", "select", "textarea", "video"}
)

FOCUSABLE_TAGS = frozenset({"button", "input", "select", "textarea"})

# ARIA composite widget roles: containers managing focus for their children.
COMPOSITE_ROLES = frozenset(
    {"combobox", "grid", "listbox", "menu", "menubar", "radiogroup", "tablist", "tree", "treegrid"}
)

# =============================================================================
# Role Messages
# =============================================================================

TAG_ROLE_MESSAGES: dict[str, str] = {
    "a": "Link",
    "article": "Article",
    "blockquote": "Quote",
    "button": "Button",
    "form": "Form",
    "img": "Image",
    "nav": "Navigation",
    "ol": "List",
    "select": "Combo box",
    "table": "Table",
    "textarea": "Text area",
    "ul": "List",
}

INPUT_TYPE_MESSAGES: dict[str, str] = {
    "button": "Button",
    "checkbox": "Check box",
    "email": "Edit text",
    "number": "Edit text",
    "password": "Password edit text",
    "radio": "Radio button",
    "range": "Slider",
    "reset": "Button",
    "search": "Edit text",
    "submit": "Button",
    "tel": "Edit text",
    "text": "Edit text",
    "url": "Edit text",
}

ARIA_ROLE_MESSAGES: dict[str, str] = {
    "alert": "Alert",
    "alertdialog": "Alert dialog",
    "article": "Article",
    "banner": "Banner",
    "button": "Button",
    "checkbox": "Check box",
    "combobox": "Combo box",
    "complementary": "Complementary",
    "dialog": "Dialog",
    "document": "Document",
    "grid": "Grid",
    "group": "Group",
    "heading": "Heading",
    "img": "Image",
    "link": "Link",
    "list": "List",
    "listbox": "List box",
    "log": "Log",
    "main": "Main",
    "marquee": "Marquee",
    "math": "Math",
    "menu": "Menu",
    "menubar": "Menu bar",
    "menuitem": "Menu item",
    "navigation": "Navigation",
    "progressbar": "Progress bar",
    "radio": "Radio button",
    "radiogroup": "Radio group",
    "region": "Region",
    "scrollbar": "Scroll bar",
    "search": "Search",
    "separator": "Separator",
    "slider": "Slider",
    "spinbutton": "Spin button",
    "status": "Status",
    "tab": "Tab",
    "tablist": "Tab list",
    "tabpanel": "Tab panel",
    "textbox": "Edit text",
    "toolbar": "Tool bar",
    "tooltip": "Tool tip",
    "tree": "Tree",
    "treegrid": "Tree grid",
    "treeitem": "Tree item",
}

# Roles whose elements are announced through dialog events, not navigation.
SILENT_ROLES = frozenset({"alertdialog"})
