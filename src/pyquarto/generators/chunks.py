"""Code-chunk headers (```{r label, echo=FALSE}) and ObservableJS snippets."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

_FENCE = re.compile(r"^\s*`{3,}\s*")
# commas, or bare whitespace in front of the next key=
_OPTION_SPLIT = re.compile(r",\s*|\s+(?=[\w.-]+\s*=)")


@dataclass
class ChunkHeader:
    language: str = "r"
    label: str | None = None
    options: list[str] = field(default_factory=list)

    def render(self) -> str:
        parts = ([self.label] if self.label else []) + self.options
        if not parts:
            return f"```{{{self.language}}}"
        return f"```{{{self.language} {', '.join(parts)}}}"


def parse_chunk_header(header: str) -> ChunkHeader:
    """Parse ``{r label, opt=val}`` with or without the fence and braces."""
    text = _FENCE.sub("", header.strip())
    if text.startswith("{"):
        text = text[1:]
    if text.endswith("}"):
        text = text[:-1]
    text = text.strip()
    m = re.match(r"([^\s,]*)[\s,]*(.*)$", text, re.S)
    language = (m.group(1) if m else "") or "r"
    rest = m.group(2) if m else ""
    label: str | None = None
    options: list[str] = []
    for i, item in enumerate(p.strip() for p in _OPTION_SPLIT.split(rest)):
        if not item:
            continue
        if "=" not in item and i == 0 and label is None:
            label = item
        else:
            options.append(re.sub(r"\s*=\s*", "=", item, count=1))
    return ChunkHeader(language=language, label=label, options=options)


def _r_literal(value: object) -> str:
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    return str(value)


def set_chunk_output(header: str, echo: object = None, include: object = None) -> ChunkHeader:
    chunk = parse_chunk_header(header)
    kept = [o for o in chunk.options if not o.startswith(("echo=", "include="))]
    if echo is not None:
        kept.append(f"echo={_r_literal(echo)}")
    if include is not None:
        kept.append(f"include={_r_literal(include)}")
    chunk.options = kept
    return chunk


def clean_chunk_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_-]", "_", name).lower()


def name_chunk(header: str, name: str) -> ChunkHeader:
    chunk = parse_chunk_header(header)
    chunk.label = clean_chunk_name(name)
    return chunk


def ojs_chunk(code: str, chunk_options: str | list[str] | None = None) -> str:
    lines = ["```{ojs}"]
    if chunk_options:
        opts = [chunk_options] if isinstance(chunk_options, str) else list(chunk_options)
        lines.extend(f"#| {o}" for o in opts)
    lines.append(code.rstrip("\n"))
    lines.append("```")
    return "\n".join(lines)


def transpose_snippet(variable: str) -> str:
    return f"""// Transpose {variable} into a tidy array of row objects
{variable}_transposed = {{
  const data = {variable};
  if (!data) return [];
  if (Array.isArray(data)) return data; // already row-oriented

  // column-oriented (R data frame via ojs_define)
  const keys = Object.keys(data);
  if (keys.length === 0) return [];
  const length = data[keys[0]].length;
  return Array.from({{length}}, (_, i) => {{
    const row = {{}};
    keys.forEach(key => {{ row[key] = data[key][i]; }});
    return row;
  }});
}}"""


def dropdown_variable_name(label: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", label.lower()) + "_dropdown"


def dropdown_snippet(options_data: str, label: str, unique: bool = True) -> str:
    var = dropdown_variable_name(label)
    unique_block = ""
    if unique:
        unique_block = """
  if (Array.isArray(data) && data.length > 0) {
    if (typeof data[0] === 'object') {
      const firstKey = Object.keys(data[0])[0];
      options = [...new Set(data.map(d => d[firstKey]))];
    } else {
      options = [...new Set(data)];
    }
  }
"""
    return f"""// Dropdown for {label}
viewof {var} = {{
  const data = {options_data};
  let options = data;
{unique_block}
  return Inputs.select(options, {{
    label: {json.dumps(label)},
    format: d => d.toString()
  }});
}}"""


def iframe_update_snippet(dropdown_variable: str, data_set: str, template: str, placeholder: str) -> str:
    var = f"{dropdown_variable}_iframe"
    return f"""// Iframe that follows the {dropdown_variable} selection
{var} = {{
  const selectedValue = {dropdown_variable};
  const data = {data_set};

  let match = null;
  if (Array.isArray(data)) {{
    match = data.find(record =>
      Object.values(record).some(value =>
        String(value).toLowerCase() === String(selectedValue).toLowerCase()
      )
    );
  }}
  const replacement = match ? (match.id ?? match.ID ?? match.value ?? selectedValue) : selectedValue;

  const template = {json.dumps(template)};
  const iframeHtml = template.split({json.dumps(placeholder)}).join(String(replacement));
  return html`${{iframeHtml}}`;
}}"""
