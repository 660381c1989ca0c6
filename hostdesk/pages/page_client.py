"""
Content pages managed through the page-manager proxy.
"""
from typing import Any, Dict, List, Optional

from ..proxy.proxy_client import ProxyClient
from ..utils.models import Page
from ..utils.logger import get_logger


class PageClient:
    """CRUD over content pages. The proxy enforces the admin role."""

    def __init__(self, proxy: ProxyClient):
        self.proxy = proxy
        self.logger = get_logger("page_client")

    def _call(self, action: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self.proxy.call(action, payload=payload or {})

    def create_page(self, slug: str, title: str, content: str, is_published: bool = False) -> Page:
        data = self._call("create_page", {
            "slug": slug,
            "title": title,
            "content": content,
            "is_published": is_published,
        })
        self.logger.info("Page created", slug=slug)
        return Page.from_dict(data)

    def get_pages(self) -> List[Page]:
        data = self._call("read_page")
        return [Page.from_dict(row) for row in data or []]

    def get_page_by_slug(self, slug: str) -> Optional[Page]:
        data = self._call("read_page", {"slug": slug})
        return Page.from_dict(data) if data else None

    def get_page_by_id(self, page_id: str) -> Optional[Page]:
        data = self._call("read_page", {"id": page_id})
        return Page.from_dict(data) if data else None

    def update_page(self, page_id: str, **updates: Any) -> Page:
        allowed = {k: v for k, v in updates.items()
                   if k in ("slug", "title", "content", "is_published") and v is not None}
        if not allowed:
            raise ValueError("No page fields to update")
        data = self._call("update_page", {"id": page_id, **allowed})
        self.logger.info("Page updated", id=page_id, fields=sorted(allowed))
        return Page.from_dict(data)

    def delete_page(self, page_id: str) -> Dict[str, Any]:
        data = self._call("delete_page", {"id": page_id})
        self.logger.info("Page deleted", id=page_id)
        return data or {"message": "Page deleted successfully"}
