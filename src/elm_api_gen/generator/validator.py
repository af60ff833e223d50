"""Validates generated Elm declarations for structural problems."""

import re

_STRING_LITERAL_RE = re.compile(r'"(?:\\.|[^"\\])*"')
_TYPE_ALIAS_RE = re.compile(r"^type alias (\w+)")
_SIGNATURE_RE = re.compile(r"^([a-z][A-Za-z0-9_']*) :")

_PAIRS = {")": "(", "]": "[", "}": "{"}


def top_level_name(source: str) -> str | None:
    """Name defined by a declaration block, or None for anything else."""
    first_line = source.lstrip("\n").split("\n", 1)[0]
    match = _TYPE_ALIAS_RE.match(first_line) or _SIGNATURE_RE.match(first_line)
    return match.group(1) if match else None


def validate_names(sources: list[str]) -> dict[str, str]:
    """Find names defined by more than one distinct declaration.

    Returns dict of {name: error_message}.
    """
    seen: dict[str, str] = {}
    errors = {}
    for source in sources:
        name = top_level_name(source)
        if name is None:
            continue
        if name in seen and seen[name] != source:
            errors[name] = f"DuplicateDefinition: {name} is defined by more than one declaration"
        seen.setdefault(name, source)
    return errors


def validate_brackets(sources: list[str]) -> dict[str, str]:
    """Check that (), [] and {} balance outside string literals.

    Returns dict of {name: error_message}; unnamed blocks are keyed by position.
    """
    errors = {}
    for index, source in enumerate(sources):
        code = _STRING_LITERAL_RE.sub('""', source)
        stack: list[str] = []
        problem = None
        for char in code:
            if char in "([{":
                stack.append(char)
            elif char in _PAIRS:
                if not stack or stack.pop() != _PAIRS[char]:
                    problem = f"unexpected '{char}'"
                    break
        if problem is None and stack:
            problem = f"unclosed '{stack[-1]}'"
        if problem:
            key = top_level_name(source) or f"<declaration {index}>"
            errors[key] = f"UnbalancedBrackets: {problem}"
    return errors


def validate_declarations(sources: list[str]) -> dict[str, str]:
    """Run all validations on generated declarations.

    Returns dict of {name: error_message} for all problems found.
    """
    errors = {}
    errors.update(validate_names(sources))
    errors.update(validate_brackets(sources))
    return errors
