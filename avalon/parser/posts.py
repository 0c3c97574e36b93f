"""Post enumeration on the profile page."""

from bs4 import BeautifulSoup

from ..models import PostHandle

# Story containers carry the feed-tracking blob in data-ft
_POST_SELECTOR = 'div[data-ft][role="article"]'


def extract_posts(soup: BeautifulSoup) -> list[PostHandle]:
    return [
        PostHandle(data_ft=div["data-ft"], html=str(div))
        for div in soup.select(_POST_SELECTOR)
    ]
