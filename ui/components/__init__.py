"""
This package provides a collection of reusable UI components for the Streamlit application.

It is organized into several modules, each containing a specific category of components:
- `base`: CSS injection, status badges, the club header and `call_api` error handling.
- `cards`: Event, absence request, make-up and club member cards.
- `point_sheet`: The colour-coded member x event attendance grid.
- `dancer_form`: Dancer information form shared by registration and audition setup.
- `auth_forms`: Password change and password reset forms.

By importing the components here, we provide a single, consistent access point
for the rest of the application (`from ui import components`).
"""

from .base import (
    inject_base_css,
    status_badge,
    color_badge,
    club_header,
    call_api,
)

from .cards import (
    event_badge,
    level_badge,
    event_card,
    request_card,
    makeup_card,
    member_stats_card,
)

from .point_sheet import (
    render_point_sheet,
)

from .auth_forms import (
    render_password_change,
    render_forgot_password,
)
