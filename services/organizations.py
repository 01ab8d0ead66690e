"""Organization sign-up and multi-club management."""
from typing import Any, Dict, List, Optional

from domain.models import Club, club_from_dict
from services.api import ApiClient, ApiError
from utils import validation

SLUG_RULE = "can only contain lowercase letters, numbers, hyphens, and underscores"


def signup_error(form: Dict[str, str]) -> Optional[str]:
    """First validation failure of the sign-up form, checked top to bottom."""
    name = (form.get("organization_name") or "").strip()
    slug = (form.get("organization_slug") or "").strip()
    password = form.get("admin_password") or ""
    if not name:
        return "Organization name is required"
    if not slug:
        return "Organization slug is required"
    if not validation.is_valid_slug(slug):
        return f"Organization slug {SLUG_RULE}"
    if not (form.get("admin_name") or "").strip():
        return "Admin name is required"
    email = (form.get("admin_email") or "").strip()
    if not email:
        return "Admin email is required"
    if not validation.is_valid_email(email):
        return "Please enter a valid email address"
    if not password:
        return "Password is required"
    if len(password) < 6:
        return "Password must be at least 6 characters"
    if password != form.get("confirm_password"):
        return "Passwords do not match"
    return None


def signup(client: ApiClient, form: Dict[str, str]) -> Dict[str, Any]:
    """Create the organization and its first admin; returns {token, user, organization}."""
    error = signup_error(form)
    if error:
        raise ValueError(error)
    return client.post("/api/organizations/signup", json={
        "organizationName": form["organization_name"].strip(),
        "organizationSlug": form["organization_slug"].strip().lower(),
        "adminName": form["admin_name"].strip(),
        "adminEmail": form["admin_email"].strip().lower(),
        "adminPassword": form["admin_password"],
        "adminPosition": form.get("admin_position") or "President",
    }, fallback="Failed to create organization. Please try again.")


def list_clubs(client: ApiClient) -> List[Club]:
    try:
        data = client.get("/api/clubs/all", fallback="Failed to fetch clubs")
    except ApiError as e:
        if e.status == 403:
            raise ApiError("Access denied: Admin only", status=403) from e
        raise
    return [club_from_dict(c) for c in data or []]


def create_club(client: ApiClient, name: str, slug: str) -> Club:
    name, slug = (name or "").strip(), (slug or "").strip()
    if not name or not slug:
        raise ValueError("Club name and slug are required")
    if not validation.is_valid_slug(slug):
        raise ValueError(f"Slug {SLUG_RULE}")
    data = client.post("/api/clubs", json={"name": name, "slug": slug},
                       fallback="Failed to create club")
    return club_from_dict(data)


def set_club_active(client: ApiClient, club: Club, active: bool) -> None:
    client.put(f"/api/clubs/{club.id}", json={"active": active},
               fallback="Failed to update club status")
