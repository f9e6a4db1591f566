"""Display formatting for percentages and targets"""


def format_percentage(value: float) -> str:
    """Render a percentage with two decimals, e.g. 70 -> '70.00%'"""
    return f"{value:.2f}%"


def format_number(value: float) -> str:
    """Render a target at full precision, dropping a trailing ".0" (75.0 -> "75")"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
