from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

_YOUTUBE_URL = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]+)")
_SPOTIFY_URL = re.compile(r"https://open\.spotify\.com/(track|album|playlist|artist|episode|show)/([a-zA-Z0-9]+)")
_IFRAME_OPEN = re.compile(r"<iframe\b([^>]*)>", re.I)


def _set_dimension(html: str, name: str, value: str) -> str:
    return re.sub(rf'{name}="[^"]*"', f'{name}="{value}"', html, count=1)


@dataclass
class YoutubeEmbed:
    embed_code: str
    video_id: str | None
    quarto_content: str
    responsive_version: str


def youtube_embed(code_or_url: str) -> YoutubeEmbed:
    embed = code_or_url.strip()
    m = _YOUTUBE_URL.search(code_or_url)
    video_id = m.group(1) if m else None
    if video_id and "<iframe" not in embed:
        embed = (
            f'<iframe width="560" height="315" src="https://www.youtube.com/embed/{video_id}" '
            'frameborder="0" allow="accelerometer; autoplay; clipboard-write; encrypted-media; '
            'gyroscope; picture-in-picture" allowfullscreen></iframe>'
        )
    if "<iframe" not in embed or not re.search(r"youtube(?:-nocookie)?\.com", embed):
        raise ValueError("Provided code does not appear to be a valid YouTube embed iframe")

    responsive = _set_dimension(_set_dimension(embed, "width", "100%"), "height", "315")
    responsive = responsive.replace("<iframe", '<iframe style="max-width: 100%; aspect-ratio: 16/9;"', 1)
    return YoutubeEmbed(
        embed_code=embed,
        video_id=video_id,
        quarto_content=f"\n## YouTube Video\n\n{embed}\n",
        responsive_version=(
            "\n## YouTube Video (Responsive)\n\n::: {.video-container}\n"
            f"{responsive}\n:::\n\n<style>\n.video-container iframe {{\n  width: 100%;\n"
            "  max-width: 560px;\n  height: auto;\n  aspect-ratio: 16/9;\n}\n</style>\n"
        ),
    )


@dataclass
class SpotifyEmbed:
    embed_code: str
    content_type: str
    content_id: str | None
    compact_embed: str
    full_embed: str
    quarto_content: str
    responsive_version: str


def spotify_embed(code_or_url: str) -> SpotifyEmbed:
    embed = code_or_url.strip()
    m = _SPOTIFY_URL.search(code_or_url)
    if m and "<iframe" not in embed:
        kind, cid = m.group(1), m.group(2)
        embed = (
            f'<iframe src="https://open.spotify.com/embed/{kind}/{cid}" width="300" height="380" '
            'frameborder="0" allowtransparency="true" allow="encrypted-media"></iframe>'
        )
    if "<iframe" not in embed or "spotify.com" not in embed:
        raise ValueError("Provided code does not appear to be a valid Spotify embed iframe")

    compact = _set_dimension(_set_dimension(embed, "height", "152"), "width", "100%")
    full = _set_dimension(_set_dimension(embed, "height", "380"), "width", "100%")
    return SpotifyEmbed(
        embed_code=embed,
        content_type=m.group(1) if m else "unknown",
        content_id=m.group(2) if m else None,
        compact_embed=compact,
        full_embed=full,
        quarto_content=f"\n## Spotify Embed\n\n### Compact Player\n{compact}\n\n### Full Player\n{full}\n",
        responsive_version=(
            "\n## Spotify Content\n\n::: {.spotify-container}\n"
            f"{embed}\n:::\n\n<style>\n.spotify-container {{\n  display: flex;\n"
            "  justify-content: center;\n  margin: 1rem 0;\n}\n\n.spotify-container iframe {\n"
            "  max-width: 100%;\n  border-radius: 12px;\n}\n</style>\n"
        ),
    )


def is_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def shiny_iframe(url: str, width: str = "100%", height: str = "600px") -> str:
    return f'<iframe src="{url}" width="{width}" height="{height}" frameborder="0" allowfullscreen></iframe>'


def shiny_responsive_iframe(url: str, height: str = "600px") -> str:
    return (
        f'<iframe src="{url}" width="100%" height="{height}" frameborder="0" allowfullscreen '
        'style="min-height: 400px; border: 1px solid #ddd; border-radius: 4px;"></iframe>'
    )


def shiny_enhanced_block(responsive_iframe: str) -> str:
    return f"""
## Interactive Shiny Application

::: {{.shiny-container}}
<div id="shiny-loading" style="text-align: center; padding: 2rem;">
  <p>Loading Shiny application...</p>
</div>

{responsive_iframe}
:::

<style>
.shiny-container iframe {{
  width: 100%;
  max-width: 100%;
  display: block;
}}
</style>

<script>
document.addEventListener('DOMContentLoaded', function() {{
  const iframe = document.querySelector('.shiny-container iframe');
  const loading = document.querySelector('#shiny-loading');
  if (iframe && loading) {{
    iframe.onload = function() {{ loading.style.display = 'none'; }};
  }}
}});
</script>
"""


def shiny_troubleshooting(url: str) -> str:
    return f"""
## Troubleshooting Shiny App Embed

If the Shiny app doesn't load:

1. **Check URL**: Ensure {url} is accessible
2. **Framing**: The hosting platform must allow iframe embedding
3. **HTTPS**: Make sure the app uses HTTPS for secure embedding
4. **Headers**: Check whether X-Frame-Options or CSP frame-ancestors block embedding
"""


def set_iframe_attribute(html: str, name: str, value: str) -> tuple[str, bool]:
    """Set ``name="value"`` on the first iframe tag. Returns (html, attribute_existed)."""
    m = _IFRAME_OPEN.search(html)
    if not m:
        raise ValueError("Provided HTML does not contain an iframe tag")
    attrs = m.group(1)
    attr_re = re.compile(rf"""(\s){re.escape(name)}(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+))?(?=[\s/>]|$)""", re.I)
    value = value.replace('"', "&quot;")
    if attr_re.search(attrs):
        new_attrs = attr_re.sub(lambda mm: f'{mm.group(1)}{name}="{value}"', attrs, count=1)
        existed = True
    else:
        body = attrs.rstrip()
        self_closing = body.endswith("/")
        if self_closing:
            body = body[:-1].rstrip()
        new_attrs = f'{body} {name}="{value}"' + (" /" if self_closing else "")
        existed = False
    start, end = m.span(1)
    return html[:start] + new_attrs + html[end:], existed


COMMON_IFRAME_CUSTOMIZATIONS = {
    "responsive": {
        "style": "width: 100%; max-width: 100%; height: auto; aspect-ratio: 16/9;",
        "description": "Makes iframe responsive",
    },
    "fullscreen": {"allowfullscreen": "true", "description": "Enables fullscreen capability"},
    "security": {"sandbox": "allow-scripts allow-same-origin", "description": "Adds security restrictions"},
    "loading": {"loading": "lazy", "description": "Enables lazy loading"},
    "seamless": {
        "frameborder": "0",
        "scrolling": "no",
        "style": "border: none;",
        "description": "Removes borders and scrollbars",
    },
}
