
# ────────────────────────────────
# Number Formatting
# ────────────────────────────────


def format_number(value: float) -> str:
    """Render a label number: 10.0 -> "10", 0.1 * 3 -> "0.3"."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.15g}"
    return str(value)


# ────────────────────────────────
# Escaping
# ────────────────────────────────


def escape_js_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")
