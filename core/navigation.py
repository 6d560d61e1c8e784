"""Side navigation links for the dashboard."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NavLink:
    name: str
    href: str
    icon: str


NAV_LINKS: tuple[NavLink, ...] = (
    NavLink(name="Home", href="/dashboard", icon="home"),
    NavLink(name="Invoices", href="/dashboard/invoices", icon="document-duplicate"),
    NavLink(name="Customers", href="/dashboard/customers", icon="user-group"),
)


def nav_links_for(pathname: str) -> list[dict]:
    """Links with an `active` flag set on the one whose href is exactly pathname."""
    return [
        {"name": link.name, "href": link.href, "icon": link.icon, "active": link.href == pathname}
        for link in NAV_LINKS
    ]
