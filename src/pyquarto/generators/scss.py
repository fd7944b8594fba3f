from __future__ import annotations

import re


def google_font_url(font_family: str) -> str:
    family = re.sub(r"\s+", "+", font_family.strip())
    return f"https://fonts.googleapis.com/css2?family={family}:wght@300;400;500;600;700&display=swap"


def custom_theme_scss(font_family: str, primary: str, secondary: str, accent: str) -> str:
    """Quarto/Bootstrap SCSS theme: defaults section with the palette, rules section with styles."""
    return f"""/*-- scss:defaults --*/

// Import Google Fonts
@import url('{google_font_url(font_family)}');

// Custom theme variables
$font-family-sans-serif: "{font_family}", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif !default;

// Color palette
$primary: {primary} !default;
$secondary: {secondary} !default;
$accent: {accent} !default;

// Bootstrap variable overrides
$theme-colors: (
  "primary": $primary,
  "secondary": $secondary,
  "accent": $accent
) !default;

// Body and text
$body-bg: #ffffff !default;
$body-color: #333333 !default;

// Links
$link-color: $primary !default;
$link-hover-color: darken($primary, 15%) !default;

// Navigation
$navbar-brand-color: $primary !default;
$navbar-brand-hover-color: $accent !default;

/*-- scss:rules --*/

.navbar-brand {{
  font-weight: 600;
  color: $primary !important;
}}

.navbar-nav .nav-link {{
  font-weight: 500;
}}

.btn-primary {{
  background-color: $primary;
  border-color: $primary;

  &:hover {{
    background-color: darken($primary, 10%);
    border-color: darken($primary, 10%);
  }}
}}

.btn-secondary {{
  background-color: $secondary;
  border-color: $secondary;

  &:hover {{
    background-color: darken($secondary, 10%);
    border-color: darken($secondary, 10%);
  }}
}}

.text-accent {{
  color: $accent !important;
}}

.bg-accent {{
  background-color: $accent !important;
}}

// Dashboards
.dashboard-title {{
  color: $primary;
  font-weight: 600;
}}

.card {{
  border: 1px solid rgba($primary, 0.2);

  .card-header {{
    background-color: rgba($primary, 0.1);
    border-bottom-color: rgba($primary, 0.2);
  }}
}}

// Code highlighting
.sourceCode {{
  background-color: rgba($secondary, 0.05);
  border: 1px solid rgba($secondary, 0.1);
}}

// Tables
.table {{
  --bs-table-accent-bg: rgba($primary, 0.05);
}}

.table-striped > tbody > tr:nth-of-type(odd) > td {{
  background-color: rgba($primary, 0.03);
}}
"""
