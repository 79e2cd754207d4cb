"""
Small HTML building helpers.

Option maps are plain dicts of HTML attributes. The ``class`` entry may be a
string or a list of strings and the ``style`` entry a string or a dict, the
helpers below normalize both before rendering through WTForms ``html_params``.
"""

import re
from typing import Any, Dict, Iterable, Optional, Union

from markupsafe import Markup, escape
from wtforms.widgets import html_params

_WHITESPACE = re.compile(r"\s+")


def _split_classes(css: Union[str, Iterable[str], None]):
    if not css:
        return []
    if isinstance(css, str):
        return [c for c in _WHITESPACE.split(css.strip()) if c]
    classes = []
    for item in css:
        classes.extend(_split_classes(item))
    return classes


def _parse_style(style: Union[str, Dict[str, str], None]) -> Dict[str, str]:
    if not style:
        return {}
    if isinstance(style, dict):
        return dict(style)
    result = {}
    for rule in style.split(";"):
        if ":" not in rule:
            continue
        name, value = rule.split(":", 1)
        result[name.strip()] = value.strip()
    return result


def css_style(style: Dict[str, str]) -> str:
    return " ".join("{0}: {1};".format(k, v) for k, v in style.items())


def add_css_class(options: Dict[str, Any], css: Union[str, Iterable[str]]) -> None:
    """Appends css classes to ``options["class"]``, skipping duplicates."""
    classes = _split_classes(options.get("class"))
    for item in _split_classes(css):
        if item not in classes:
            classes.append(item)
    if classes:
        options["class"] = " ".join(classes)


def add_css_style(
    options: Dict[str, Any], style: Union[str, Dict[str, str]], overwrite: bool = True
) -> None:
    current = _parse_style(options.get("style"))
    for name, value in _parse_style(style).items():
        if overwrite or name not in current:
            current[name] = value
    if current:
        options["style"] = css_style(current)


def init_css(options: Dict[str, Any], css: Union[str, Iterable[str]]) -> None:
    """Sets a default css class when ``options`` has none."""
    if not options.get("class"):
        options["class"] = " ".join(_split_classes(css))


def has_grid_col(container: Optional[Dict[str, Any]]) -> bool:
    """Whether a bootstrap ``col-*`` grid class is set on the container."""
    if not container:
        return False
    return any(c.startswith("col-") for c in _split_classes(container.get("class")))


def render_attrs(options: Optional[Dict[str, Any]]) -> str:
    if not options:
        return ""
    attrs = {}
    for key, value in options.items():
        if key == "class":
            value = " ".join(_split_classes(value))
        elif key == "style" and isinstance(value, dict):
            value = css_style(value)
        elif isinstance(value, (dict, list)):
            continue
        attrs[key] = value
    return html_params(**attrs)


def tag(name: str, content: Any = "", options: Optional[Dict[str, Any]] = None) -> Markup:
    """
    Renders ``<name attrs>content</name>``.

    Plain string content is escaped, :class:`~markupsafe.Markup` is kept.
    """
    attrs = render_attrs(options)
    if content is None:
        content = ""
    return Markup("<{0}{1}>{2}</{0}>").format(
        Markup(name), Markup(" " + attrs if attrs else ""), content
    )


def begin_tag(name: str, options: Optional[Dict[str, Any]] = None) -> Markup:
    attrs = render_attrs(options)
    return Markup("<{0}{1}>").format(Markup(name), Markup(" " + attrs if attrs else ""))


def end_tag(name: str) -> Markup:
    return Markup("</{0}>").format(Markup(name))


def button(label: Any, options: Optional[Dict[str, Any]] = None) -> Markup:
    options = dict(options or {})
    options.setdefault("type", "button")
    return tag("button", label, options)


def submit_button(label: Any, options: Optional[Dict[str, Any]] = None) -> Markup:
    options = dict(options or {})
    options["type"] = "submit"
    return tag("button", label, options)


def reset_button(label: Any, options: Optional[Dict[str, Any]] = None) -> Markup:
    options = dict(options or {})
    options["type"] = "reset"
    return tag("button", label, options)


def a(label: Any, url: Optional[str] = None, options: Optional[Dict[str, Any]] = None) -> Markup:
    options = dict(options or {})
    if url is not None:
        options["href"] = url
    return tag("a", label, options)


def replace_tokens(template: Any, tokens: Dict[str, Any]) -> Markup:
    """
    Substitutes ``{token}`` placeholders in a trusted template.

    Each value is escaped unless it is already markup. Replacement happens in
    a single pass so substituted content is never scanned for tokens again.
    """
    template = str(template)
    if not tokens:
        return Markup(template)
    pattern = re.compile("|".join(re.escape(k) for k in sorted(tokens, key=len, reverse=True)))
    return Markup(pattern.sub(lambda m: str(escape(tokens[m.group(0)])), template))
