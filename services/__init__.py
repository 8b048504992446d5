from .outreach import (
    generate_outreach,
    load_event_context
)

__all__ = [
    'generate_outreach',
    'load_event_context'
]
