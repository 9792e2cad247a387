# ABOUTME: Shared pytest fixtures building inline wiki HTML for character and listing pages
# ABOUTME: Markup mirrors the infobox and card shapes the extractors navigate

import pytest

WIKI_BASE = "https://nikke.example.fandom.com"
IMAGE_CDN = "https://static.example.net/nikke/images"


def _icon_cell(attr: str, value: str) -> str:
    return f'<td><span><a href="#" {attr}="{value}"><img src="x.png"></a></span></td>'


def _build_character_page(
    name: str = "Rapi",
    rarity: str = "Ssr",
    burst: str = "Step3",
    code: str = "Element (Fire)",
    weapon: str = "Assault Rifle",
    position: str = "Category:Attackers",
    manufacturer: str = "Elysion",
    weapon_name: str | None = "Red Hood",
    squad: str | None = "Counters",
    second_group: bool = True,
) -> str:
    title = f'<h2 class="pi-title" data-source="title">{name}</h2>' if name else ""
    weapon_row = (
        f'<div data-source="weaponname"><h3>Weapon Name</h3> <div class="pi-data-value">{weapon_name}</div></div>'
        if weapon_name is not None
        else ""
    )
    squad_row = (
        f'<div data-source="squad"><h3>Squad</h3> <div class="pi-data-value">{squad}</div></div>'
        if squad is not None
        else ""
    )
    first = f"""
    <table class="pi-horizontal-group">
      <tbody>
        <tr>
          <td><span><a href="#"><img alt="{rarity}" src="r.png"></a></span></td>
          <td><span><a href="#"><img alt="{burst}" src="b.png"></a></span></td>
        </tr>
      </tbody>
    </table>"""
    second = f"""
    <table class="pi-horizontal-group">
      <tbody>
        <tr>
          {_icon_cell("title", code)}
          {_icon_cell("title", weapon)}
          {_icon_cell("title", position)}
          {_icon_cell("title", manufacturer)}
        </tr>
      </tbody>
    </table>"""
    return f"""<!DOCTYPE html>
<html>
  <body>
    <aside class="portable-infobox">
      {title}
      <!-- infobox rows -->
      {first}
      {second if second_group else ""}
      {weapon_row}
      {squad_row}
    </aside>
  </body>
</html>"""


def _card(name: str, slug: str, attr: str = "data-src") -> str:
    src = f"{IMAGE_CDN}/a/ab/{slug}_Icon.png/revision/latest/scale-to-width-down/80?cb=20230101"
    return f'<div class="lcs-item"><div class="lcs-card"><a href="/wiki/{slug}"><img alt="{name}" {attr}="{src}"></a></div></div>'


def _build_listing_page(cards: list[str]) -> str:
    return f"""<html><body>
    <div class="lcs-container">
      <div class="lcs-header">Characters</div>
      <div class="lcs-body">
        <div class="lcs-grid">
          {"".join(cards)}
        </div>
      </div>
    </div>
    </body></html>"""


@pytest.fixture
def character_page():
    """Factory for character page markup; keyword arguments override single fields."""
    return _build_character_page


@pytest.fixture
def card():
    """Factory for one listing card."""
    return _card


@pytest.fixture
def listing_page():
    """Factory wrapping card markup in the listing container."""
    return _build_listing_page


@pytest.fixture
def wiki_base() -> str:
    return WIKI_BASE


@pytest.fixture
def image_cdn() -> str:
    return IMAGE_CDN


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Rate limiting is global state; keep it disabled between tests."""
    from nikkedex.utils.retry import configure_fetch_retry

    configure_fetch_retry(0.0)
    yield
    configure_fetch_retry(0.0)


@pytest.fixture
def fast_retry():
    """Retry policy without waits for tests that exercise retries."""
    from nikkedex.utils.retry import fetch_retry

    return fetch_retry(max_attempts=3, min_wait=0, max_wait=0, with_rate_limiting=False)


@pytest.fixture
def png_bytes() -> bytes:
    """A real 200x100 PNG so thumbnails can be checked for size."""
    import io

    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
