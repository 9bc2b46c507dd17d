"""Translate Hurl values, captures and assertions to Bruno JavaScript.

Bruno post-response scripts use Chai's expect() API with the response
available as `res` and run variables behind bru.getVar()/bru.setVar().

Nothing in this module raises on unexpected input. Unknown value shapes
pass through unchanged and unknown assertions become an
`// UNHANDLED ASSERT:` comment so they show up in the generated files.
"""

import re

from hurl2bruno.core.hurl_data import HurlCapture, TranslatedValue

INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")
DECIMAL_PATTERN = re.compile(r"^-?[0-9]+\.[0-9]+$")
VARIABLE_PATTERN = re.compile(r"^\{\{(\w+)\}\}$", re.ASCII)

JSONPATH_ASSERT_PATTERN = re.compile(r'^jsonpath\s+"([^"]+)"\s+(.+)$')
COUNT_PATTERN = re.compile(r"^count\s+(==|>=)\s+(.+)$")
CONTAINS_PATTERN = re.compile(r"^contains\s+(.+)$")
MATCHES_PATTERN = re.compile(r'^matches\s+"([^"]*)"$')
COMPARE_PATTERN = re.compile(r"^(==|>=)\s+(.+)$")

RESPONSE_BODY = "res.body"
UNHANDLED_PREFIX = "// UNHANDLED ASSERT: "


def get_var(name: str) -> str:
    return f'bru.getVar("{name}")'


def _template_concat(inner: str) -> str:
    """Build a concatenation of literal fragments and variable lookups.

    "auth_{{uid}}" -> "auth_" + bru.getVar("uid")
    """
    parts = []
    remaining = inner
    while remaining:
        start = remaining.find("{{")
        end = remaining.find("}}", start + 2) if start != -1 else -1
        if start == -1 or end == -1:
            parts.append(f'"{remaining}"')
            break
        if start > 0:
            parts.append(f'"{remaining[:start]}"')
        parts.append(get_var(remaining[start + 2 : end]))
        remaining = remaining[end + 2 :]
    return " + ".join(parts)


def transform_value(raw_value: str) -> TranslatedValue:
    """Translate a Hurl value token to a JavaScript expression.

    Args:
        raw_value: Value as written in the Hurl file (quotes included)

    Returns:
        TranslatedValue with the expression text
    """
    if raw_value == "null":
        return TranslatedValue(expr="null", is_null=True)
    if raw_value in ("true", "false"):
        return TranslatedValue(expr=raw_value)
    if INTEGER_PATTERN.match(raw_value) or DECIMAL_PATTERN.match(raw_value):
        return TranslatedValue(expr=raw_value)

    bare_var = VARIABLE_PATTERN.match(raw_value)
    if bare_var:
        return TranslatedValue(expr=get_var(bare_var.group(1)))

    if raw_value.startswith('"') and raw_value.endswith('"'):
        inner = raw_value[1:-1]

        pure_var = VARIABLE_PATTERN.match(inner)
        if pure_var:
            return TranslatedValue(expr=get_var(pure_var.group(1)))

        if "{{" in inner:
            return TranslatedValue(expr=_template_concat(inner))

    return TranslatedValue(expr=raw_value)


def _strip_root(jsonpath: str) -> str:
    return jsonpath[2:] if jsonpath.startswith("$.") else jsonpath


def jsonpath_to_js(jsonpath: str) -> str:
    """Convert "$.user.username" to "res.body.user.username"."""
    return f"{RESPONSE_BODY}.{_strip_root(jsonpath)}"


def jsonpath_to_property_check(jsonpath: str) -> tuple[str, str]:
    """Split a JSONPath into parent expression and final property name.

    "$.articles[0].body" -> ("res.body.articles[0]", "body")
    """
    path = _strip_root(jsonpath)
    parent, dot, prop = path.rpartition(".")
    if not dot:
        return RESPONSE_BODY, path
    return f"{RESPONSE_BODY}.{parent}", prop


def capture_to_js(capture: HurlCapture) -> str:
    return f'bru.setVar("{capture.name}", {jsonpath_to_js(capture.jsonpath)});'


def assert_to_js(assert_line: str) -> str:
    """Translate one [Asserts] line to a Chai expectation.

    Args:
        assert_line: Trimmed assertion line, e.g. 'jsonpath "$.x" == "val"'

    Returns:
        A JavaScript statement, or an UNHANDLED ASSERT comment
    """
    jp_match = JSONPATH_ASSERT_PATTERN.match(assert_line)
    if not jp_match:
        return UNHANDLED_PREFIX + assert_line

    jsonpath = jp_match.group(1)
    rest = jp_match.group(2).strip()
    js_path = jsonpath_to_js(jsonpath)

    count_match = COUNT_PATTERN.match(rest)
    if count_match:
        op, raw = count_match.group(1), count_match.group(2).strip()
        value = transform_value(raw)
        if op == "==":
            return f"expect({js_path}.length).to.eql({value.expr});"
        return f"expect({js_path}.length).to.be.at.least({value.expr});"

    if rest == "not exists":
        parent, prop = jsonpath_to_property_check(jsonpath)
        return f'expect({parent}).to.not.have.property("{prop}");'

    if rest == "not isEmpty":
        return f'expect({js_path}).to.not.eql("");'

    if rest == "isString":
        return f'expect(typeof {js_path}).to.eql("string");'

    if rest == "isInteger":
        return f"expect(Number.isInteger({js_path})).to.eql(true);"

    if rest == "isCollection":
        return f"expect(Array.isArray({js_path})).to.eql(true);"

    contains_match = CONTAINS_PATTERN.match(rest)
    if contains_match:
        value = transform_value(contains_match.group(1).strip())
        return f"expect({js_path}).to.include({value.expr});"

    matches_match = MATCHES_PATTERN.match(rest)
    if matches_match:
        return f"expect({js_path}).to.match(/{matches_match.group(1)}/);"

    compare_match = COMPARE_PATTERN.match(rest)
    if compare_match:
        op, raw = compare_match.group(1), compare_match.group(2).strip()
        value = transform_value(raw)
        if op == "==":
            if value.is_null:
                return f"expect({js_path}).to.be.null;"
            return f"expect({js_path}).to.eql({value.expr});"
        return f"expect({js_path}).to.be.at.least({value.expr});"

    return UNHANDLED_PREFIX + assert_line
