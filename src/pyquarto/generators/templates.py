"""Starter files for new projects and slide decks."""
from __future__ import annotations

from typing import Any

from ..documents.frontmatter import serialize_front_matter


def quarto_project_config(title: str) -> dict[str, Any]:
    return {
        "project": {"type": "website"},
        "website": {
            "title": title,
            "navbar": {"left": [{"href": "index.qmd", "text": "Home"}]},
        },
        "format": {"html": {"theme": "cosmo", "css": "styles.css", "toc": True}},
    }


def index_qmd(title: str) -> str:
    body = f"""
# Welcome to {title}

This is a Quarto project.

## About

[Add your content here]
"""
    return serialize_front_matter({"title": title}, body)


def project_styles_css(title: str) -> str:
    return f"/* Custom styles for {title} */\n\n/* Add your custom CSS here */\n"


def project_readme(name: str, *, use_renv: bool = True) -> str:
    restore = ""
    if use_renv:
        restore = """1. Restore R dependencies:
   ```bash
   R -e "renv::restore()"
   ```

"""
    renv_line = "- `renv/` - R package dependencies\n" if use_renv else ""
    step = 2 if use_renv else 1
    return f"""# {name}

A Quarto project created with pyquarto.

## Getting Started

{restore}{step}. Render the project:
   ```bash
   quarto render
   ```

{step + 1}. Preview locally:
   ```bash
   quarto preview
   ```

## Project Structure

- `index.qmd` - Main content file
- `_quarto.yml` - Quarto configuration
- `styles.css` - Custom styles
{renv_line}
## Deployment

This project can be deployed to GitHub Pages or other static hosting services.
"""


def revealjs_header(
    title: str,
    author: str,
    theme_file: str,
    highlight_style: str = "atom-one",
    background_image: str | None = None,
) -> dict[str, Any]:
    revealjs: dict[str, Any] = {
        "theme": theme_file,
        "highlight-style": highlight_style,
        "slide-number": True,
        "chalkboard": True,
        "preview-links": "auto",
        "css": "styles.css",
    }
    if background_image:
        revealjs["title-slide-attributes"] = {
            "data-background-image": background_image,
            "data-background-size": "cover",
            "data-background-opacity": "0.7",
        }
    return {"title": title, "author": author, "format": {"revealjs": revealjs}}


_SLIDES_BODY = """
# {title}

{author}

## Slide 2

Content for your second slide goes here.

- Bullet point 1
- Bullet point 2
- Bullet point 3

## Code Example

```{{r}}
#| echo: true
library(ggplot2)
data(mtcars)
ggplot(mtcars, aes(x = mpg, y = hp)) +
  geom_point() +
  labs(title = "Miles per Gallon vs Horsepower")
```

## Thank You!

Questions?
"""


def revealjs_slides(
    title: str,
    author: str,
    theme_file: str,
    highlight_style: str = "atom-one",
    background_image: str | None = None,
) -> str:
    header = revealjs_header(title, author, theme_file, highlight_style, background_image)
    return serialize_front_matter(header, _SLIDES_BODY.format(title=title, author=author))


SLIDES_CSS = """/* Custom styles for RevealJS slides */
.reveal h1, .reveal h2, .reveal h3 {
  text-transform: none;
}

.reveal .slides section {
  text-align: left;
}

.reveal .slides section > h1,
.reveal .slides section > h2 {
  text-align: center;
}

.reveal pre code {
  max-height: 400px;
  overflow-y: auto;
}

/* title slide text over a background image */
.reveal .title .title {
  color: white;
  text-shadow: 2px 2px 4px rgba(0,0,0,0.8);
}

.reveal .title .author {
  color: white;
  text-shadow: 1px 1px 2px rgba(0,0,0,0.8);
}
"""
