"""
Unit tests for the page-manager client.
"""
import pytest
from unittest.mock import Mock

from hostdesk.pages.page_client import PageClient
from hostdesk.proxy.proxy_client import ProxyClient
from hostdesk.utils.models import Page

PAGE_ROW = {
    "id": "p1",
    "slug": "house-rules",
    "title": "House rules",
    "content": "No parties.",
    "is_published": True,
    "author_id": "user-1",
}


@pytest.fixture
def proxy():
    return Mock(spec=ProxyClient)


@pytest.fixture
def pages(proxy):
    return PageClient(proxy)


def test_create_page(pages, proxy):
    proxy.call.return_value = PAGE_ROW

    page = pages.create_page("house-rules", "House rules", "No parties.", True)

    proxy.call.assert_called_once_with("create_page", payload={
        "slug": "house-rules", "title": "House rules",
        "content": "No parties.", "is_published": True,
    })
    assert isinstance(page, Page)
    assert page.slug == "house-rules"


def test_get_pages(pages, proxy):
    proxy.call.return_value = [PAGE_ROW, dict(PAGE_ROW, id="p2", slug="faq")]

    result = pages.get_pages()

    proxy.call.assert_called_once_with("read_page", payload={})
    assert [p.slug for p in result] == ["house-rules", "faq"]


def test_get_pages_empty(pages, proxy):
    proxy.call.return_value = None
    assert pages.get_pages() == []


def test_get_page_by_slug(pages, proxy):
    proxy.call.return_value = PAGE_ROW
    assert pages.get_page_by_slug("house-rules").id == "p1"
    proxy.call.assert_called_once_with("read_page", payload={"slug": "house-rules"})


def test_get_page_by_id_missing(pages, proxy):
    proxy.call.return_value = None
    assert pages.get_page_by_id("nope") is None


def test_update_page_sends_only_given_fields(pages, proxy):
    proxy.call.return_value = dict(PAGE_ROW, title="Rules")

    page = pages.update_page("p1", title="Rules", content=None, author_id="other")

    proxy.call.assert_called_once_with("update_page", payload={"id": "p1", "title": "Rules"})
    assert page.title == "Rules"


def test_update_page_without_fields(pages, proxy):
    with pytest.raises(ValueError):
        pages.update_page("p1")
    proxy.call.assert_not_called()


def test_delete_page(pages, proxy):
    proxy.call.return_value = None

    result = pages.delete_page("p1")

    proxy.call.assert_called_once_with("delete_page", payload={"id": "p1"})
    assert result == {"message": "Page deleted successfully"}
