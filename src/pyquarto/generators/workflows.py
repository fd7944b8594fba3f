from __future__ import annotations

PUBLISH_WORKFLOW = """name: Publish Quarto Site

on:
  push:
    branches: [main]
  pull_request:
    branches: [main]

permissions:
  contents: read
  pages: write
  id-token: write

concurrency:
  group: "pages"
  cancel-in-progress: false

jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - name: Checkout
        uses: actions/checkout@v4

      - name: Setup R
        uses: r-lib/actions/setup-r@v2
        with:
          use-public-rspm: true

      - name: Setup Quarto
        uses: quarto-dev/quarto-actions/setup@v2

      - name: Restore renv packages
        shell: Rscript {0}
        run: |
          if (!requireNamespace("renv", quietly = TRUE)) install.packages("renv")
          renv::restore()

      - name: Setup Pages
        uses: actions/configure-pages@v3

      - name: Render Quarto Project
        uses: quarto-dev/quarto-actions/render@v2

      - name: Upload artifact
        uses: actions/upload-pages-artifact@v2
        with:
          path: ./_site

  deploy:
    environment:
      name: github-pages
      url: ${{ steps.deployment.outputs.page_url }}
    runs-on: ubuntu-latest
    needs: build
    steps:
      - name: Deploy to GitHub Pages
        id: deployment
        uses: actions/deploy-pages@v2
"""

_BASE_IGNORES = [
    ".Rproj.user",
    ".Rhistory",
    ".RData",
    ".Ruserdata",
    ".Renviron",
    ".quarto/",
    "_site/",
    "*_files/",
    "renv/library/",
    ".DS_Store",
    "node_modules/",
    "*.log",
]

# written by the project scaffold
PROJECT_GITIGNORE = "\n".join(_BASE_IGNORES) + "\n"

# written by quarto_create_gitignore when no content is given
DEFAULT_GITIGNORE = "\n".join(_BASE_IGNORES + [".env", "*.tmp", "*.temp", "Thumbs.db"]) + "\n"


def secret_env_reference(secret_name: str) -> str:
    return "${{ secrets.%s }}" % secret_name
