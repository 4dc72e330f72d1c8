from dataclasses import dataclass
from typing import Optional

# Provider mode strings -> canonical transport type values. Only used for
# display/styling; transfer detection compares normalize_mode() output.
MODE_ALIASES = {
    'walk': 'walk',
    'walking': 'walk',
    'jeepney': 'jeepney',
    'jeep': 'jeepney',
    'bus': 'bus',
    'uv_express': 'uv_express',
    'uv express': 'uv_express',
    'uvexpress': 'uv_express',
    'uv': 'uv_express',
    'train': 'train',
    'lrt': 'train',
    'mrt': 'train',
    'pnr': 'train',
    'rail': 'train',
}


@dataclass(frozen=True)
class TransportStyle:
    color: str
    icon: str
    label: str


TRANSPORT_STYLES = {
    'jeepney': TransportStyle(color='#e74c3c', icon='🚐', label='Jeepney'),
    'bus': TransportStyle(color='#3498db', icon='🚌', label='Bus'),
    'uv_express': TransportStyle(color='#9b59b6', icon='🚐', label='UV Express'),
    'train': TransportStyle(color='#2ecc71', icon='🚆', label='Train'),
    'walk': TransportStyle(color='#7f8c8d', icon='🚶', label='Walk'),
}
DEFAULT_STYLE = TransportStyle(color='#95a5a6', icon='🚗', label='Transport')

CONNECTOR_COLOR = '#7f8c8d'


def normalize_mode(mode: Optional[str]) -> str:
    """Lower-case and trim a raw mode string"""
    return str(mode or '').strip().lower()


def canonical_mode(mode: Optional[str]) -> str:
    normalized = normalize_mode(mode)
    return MODE_ALIASES.get(normalized, normalized)


def get_transport_style(mode) -> TransportStyle:
    """Style for a TransportType or raw mode string"""
    value = getattr(mode, 'value', mode)
    return TRANSPORT_STYLES.get(canonical_mode(value), DEFAULT_STYLE)


def get_transport_color(mode) -> str:
    return get_transport_style(mode).color


def get_transport_label(mode) -> str:
    return get_transport_style(mode).label
