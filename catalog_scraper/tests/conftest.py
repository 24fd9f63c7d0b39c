"""Shared fixtures: a sample product page and a stub HTTP session."""

from typing import Dict, List, Optional, Set

import pytest
import requests
from bs4 import BeautifulSoup

from catalog_scraper.config import ScraperConfig


BASE_URL = "http://shop.example"
URL_TEMPLATE = f"{BASE_URL}/product.php?id_product="

PRODUCT_PAGE = """<!DOCTYPE html>
<html>
<head><title>Hiking Boot X</title></head>
<body>
  <div class="breadcrumb">
    <span class="navigation_end"><a href="/category.php?id_category=3">Obu&amp;amp;ća</a></span>
  </div>
  <div id="primary_block">
    <h2>Hiking Boot&nbsp;X</h2>
    <div id="image-block"><img id="bigpic" src="/img/large/1.jpg" alt=""></div>
    <div id="views_block">
      <ul id="thumbs_list_frame">
        <li><a href="#"><img src="/img/medium/2.jpg" alt=""></a></li>
        <li><a href="#"><img src="/img/medium/3.jpg" alt=""></a></li>
      </ul>
    </div>
    <div class="product_short_features_list">
      <table>
        <tbody>
          <tr><td class="feature_name">Boja</td><td class="feature_value"> Crvena </td></tr>
          <tr><td class="feature_name">Isporuka</td><td class="feature_value"><span class="not_available">ne</span></td></tr>
          <tr><td class="feature_name">Skladište</td><td class="feature_value"><span class="available">da</span></td></tr>
          <tr><td class="feature_name">Cijena</td><td class="feature_value"><span class="editable">1.299,00 kn</span><span class="available">da</span></td></tr>
        </tbody>
      </table>
    </div>
    <div id="attributes">
      <fieldset class="attribute_fieldset">
        <label class="attribute_label">Veličina :</label>
        <select name="group_1">
          <option value="1">41</option>
          <option value="2">42</option>
          <option value="3"></option>
        </select>
      </fieldset>
      <fieldset class="attribute_fieldset">
        <label class="attribute_label">Boja:</label>
        <select name="group_2"></select>
      </fieldset>
    </div>
  </div>
  <div id="idTab1">
    <p><span>Lagana planinarska cipela.</span></p>
    <p><span>Vodootporna <strong>Gore-Tex</strong> membrana<br> za sve uvjete.</span></p>
    <p>Bez opisa.</p>
  </div>
  <div id="idTab2">
    <table>
      <tr><td class="product_feature_name">Težina:</td><td class="product_feature_value"> 450 g </td></tr>
      <tr><td class="product_feature_name"> Materijal :</td><td class="product_feature_value">Koža</td></tr>
    </table>
  </div>
  <div id="geometry_image"><img src="/img/geometry/1.png?w=1&amp;amp;h=2" alt=""></div>
</body>
</html>
"""

NOT_A_PRODUCT_PAGE = """<html><body>
  <div id="center_column"><h2>Proizvod nije pronađen</h2></div>
</body></html>
"""


def make_page(name: str) -> str:
    return f'<html><body><div id="primary_block"><h2>{name}</h2></div></body></html>'


@pytest.fixture
def product_soup():
    return BeautifulSoup(PRODUCT_PAGE, "lxml")


@pytest.fixture
def config(tmp_path):
    return ScraperConfig(
        url_template=URL_TEMPLATE,
        min_id=1,
        max_id=3,
        cache_dir=str(tmp_path / "data"),
        output_dir=str(tmp_path / "out"),
        delay=0,
    )


class StubResponse:
    def __init__(self, url: str, content: bytes, status_code: int = 200):
        self.url = url
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=None)


class StubSession:
    """Serves pages keyed by the product id at the end of the URL."""

    def __init__(self, pages: Optional[Dict[int, str]] = None, offline: bool = False):
        self.pages = pages or {}
        self.offline = offline
        self.unreachable: Set[int] = set()
        self.requested: List[int] = []

    def get(self, url, timeout=None, allow_redirects=True):
        identifier = int(url.rsplit("=", 1)[1])
        self.requested.append(identifier)
        if self.offline or identifier in self.unreachable:
            raise requests.ConnectionError(f"cannot reach {url}")
        if identifier not in self.pages:
            return StubResponse(url, b"", status_code=404)
        return StubResponse(url, self.pages[identifier].encode("utf-8"))


@pytest.fixture
def stub_session():
    return StubSession()
