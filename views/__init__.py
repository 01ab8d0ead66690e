"""View modules for manual routing.

`app.py` routes on the `page` query parameter instead of Streamlit's automatic
multi-page system, so a page can carry its own parameters (`?page=attendance&event=...`)
and be guarded by role. Each screen lives here as a module exposing a `view()`
function; the admin dashboard tabs live in `views/admin_tabs/`.

Add a new page as a module with a `view()` callable and register it in
`PAGE_REGISTRY` inside `app.py`.
"""
