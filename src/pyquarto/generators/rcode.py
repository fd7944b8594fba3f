"""R source snippets handed to the R interpreter or returned to the caller."""
from __future__ import annotations

import json
from typing import Any


def _r_string(value: str) -> str:
    # JSON string escaping is valid R string syntax for the characters we emit
    return json.dumps(value, ensure_ascii=False)


RENV_INIT = """if (!requireNamespace("renv", quietly = TRUE)) {
  install.packages("renv", repos = "https://cloud.r-project.org")
}
renv::init(restart = FALSE)
"""

RENV_SNAPSHOT = """if (!requireNamespace("renv", quietly = TRUE)) {
  stop("renv is not available. Please initialize renv first.")
}
renv::snapshot(prompt = FALSE)
"""

RENV_STATUS = """if (!requireNamespace("renv", quietly = TRUE)) {
  stop("renv is not available. Please initialize renv first.")
}
status <- renv::status()
print(status)
"""


def renv_install(package_name: str) -> str:
    return f"""if (!requireNamespace("renv", quietly = TRUE)) {{
  install.packages("renv", repos = "https://cloud.r-project.org")
}}
renv::install({_r_string(package_name)}, prompt = FALSE)
"""


def get_env_var(variable_name: str) -> str:
    return f"""# Get environment variable with error handling
get_env_var <- function(var_name) {{
  value <- Sys.getenv(var_name)
  if (value == "") {{
    warning(paste("Environment variable", var_name, "is not set or is empty"))
    return(NULL)
  }}
  value
}}

{variable_name}_value <- get_env_var({_r_string(variable_name)})
print(paste("Variable", {_r_string(variable_name)}, "is",
            ifelse(is.null({variable_name}_value), "not set", "set")))
"""


def ojs_define_chunk(r_data_frame: str, ojs_variable_name: str, chunk_options: list[str] | None = None) -> str:
    opts = ", ".join(chunk_options) if chunk_options else "echo=FALSE"
    return f"""```{{r {opts}}}
# Send R data to ObservableJS
library(quarto)
ojs_define({ojs_variable_name} = {r_data_frame})
```
"""


def ojs_usage_chunk(ojs_variable_name: str) -> str:
    return f"""```{{ojs}}
// Use the data from R
Inputs.table(transpose({ojs_variable_name}))
```
"""


def httr2_call(api_endpoint: str, request_path: str, token_file: str, body_file: str) -> str:
    """httr2 POST helper. Credentials are read from files at run time, never inlined."""
    return f"""library(httr2)
library(jsonlite)

api_call <- function(endpoint, path, token, body_data) {{
  req <- request(paste0(endpoint, path)) |>
    req_auth_bearer_token(token) |>
    req_headers(Accept = "application/json") |>
    req_body_json(body_data) |>
    req_retry(max_tries = 3)

  resp <- req_perform(req)
  if (resp_status(resp) >= 400) {{
    stop(paste("API call failed with status:", resp_status(resp)))
  }}
  resp_body_json(resp)
}}

auth_token <- Sys.getenv("PYQUARTO_API_TOKEN")
if (auth_token == "") {{
  auth_token <- trimws(readLines({_r_string(token_file)}, warn = FALSE)[1])
}}
body_json_data <- fromJSON({_r_string(body_file)}, simplifyVector = FALSE)

result <- api_call(
  endpoint = {_r_string(api_endpoint)},
  path = {_r_string(request_path)},
  token = auth_token,
  body_data = body_json_data
)
str(result)
"""


def gt_table(data_frame: str, gt_options: dict[str, Any] | None = None) -> str:
    steps: list[str] = []
    opts = gt_options or {}
    title = opts.get("title")
    subtitle = opts.get("subtitle")
    if title or subtitle:
        args = []
        if title:
            args.append(f"title = {_r_string(str(title))}")
        if subtitle:
            args.append(f"subtitle = {_r_string(str(subtitle))}")
        steps.append(f"tab_header({', '.join(args)})")
    for key, value in opts.items():
        if key in ("title", "subtitle"):
            continue
        if key == "source_note":
            steps.append(f"tab_source_note(source_note = {_r_string(str(value))})")
        elif key == "theme":
            steps.append(f"opt_stylize(style = {int(value)})")
        elif key == "column_labels" and isinstance(value, dict):
            labels = ", ".join(f"{col} = {_r_string(str(label))}" for col, label in value.items())
            steps.append(f"cols_label({labels})")
        elif key == "column_width" and isinstance(value, dict):
            widths = ", ".join(f"{col} ~ px({int(w)})" for col, w in value.items())
            steps.append(f"cols_width({widths})")
        else:
            steps.append(f"# unsupported option: {key} = {json.dumps(value)}")
    pipeline = f"{data_frame}_gt <- {data_frame} |>\n  gt()"
    for step in steps:
        if step.startswith("#"):
            pipeline += f"\n  {step}"
        else:
            pipeline += f" |>\n  {step}"
    return f"library(gt)\n\n{pipeline}\n\n{data_frame}_gt\n"


GT_OPTION_EXAMPLES = """gt_options <- list(
  title = "My Table Title",
  subtitle = "Subtitle here",
  source_note = "Data source information",
  theme = 6,
  column_labels = list(old_name = "New Label"),
  column_width = list(col1 = 100, col2 = 150)
)
"""


def download_file(url: str, local_path: str, mode: str = "wb") -> str:
    return f"""download_file_safely <- function(url, destfile, mode = "wb") {{
  tryCatch({{
    download.file(url = url, destfile = destfile, mode = mode)
    TRUE
  }}, error = function(e) {{
    message("Error downloading file: ", conditionMessage(e))
    FALSE
  }})
}}

if (!download_file_safely({_r_string(url)}, {_r_string(local_path)}, mode = {_r_string(mode)})) {{
  stop("Download failed")
}}
cat("File size:", file.size({_r_string(local_path)}), "bytes\\n")
"""


def json_parse(json_file: str) -> str:
    return f"""library(jsonlite)

parse_json_safely <- function(path) {{
  tryCatch(
    fromJSON(path, simplifyVector = TRUE, simplifyDataFrame = TRUE),
    error = function(e) {{
      message("Error parsing JSON: ", conditionMessage(e))
      NULL
    }}
  )
}}

parsed_data <- parse_json_safely({_r_string(json_file)})
if (!is.null(parsed_data)) str(parsed_data)
"""


def zip_folder(output_file_path: str, folder_to_zip: str) -> str:
    return f"""create_zip_safely <- function(zipfile, files, flags = "-r9X") {{
  tryCatch({{
    zip(zipfile = zipfile, files = files, flags = flags)
    TRUE
  }}, error = function(e) {{
    message("Error creating zip file: ", conditionMessage(e))
    FALSE
  }})
}}

if (!create_zip_safely({_r_string(output_file_path)}, {_r_string(folder_to_zip)})) {{
  stop("Failed to create zip file")
}}
cat("Size:", file.size({_r_string(output_file_path)}), "bytes\\n")
"""
