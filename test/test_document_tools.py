from __future__ import annotations

import pytest

from pyquarto.documents.frontmatter import parse_front_matter
from pyquarto.documents.yaml_file import load_yaml_mapping
from pyquarto.errors import NotFoundError, ValidationError
from pyquarto.generators.workflows import DEFAULT_GITIGNORE


async def run(registry, ctx, name, **params):
    result = await registry.execute(name, params, ctx)
    return result.to_dict()


@pytest.mark.asyncio
async def test_dashboard_format_is_idempotent(registry, ctx, write):
    path = write("dash.qmd", "---\ntitle: Foo\n---\nBody\n")
    out = await run(registry, ctx, "quarto_define_dashboard_format", qmd_file_path="dash.qmd")
    first = path.read_bytes()
    await run(registry, ctx, "quarto_define_dashboard_format", qmd_file_path="dash.qmd")

    assert out["success"] is True
    assert out["paths_touched"] == [str(path)]
    assert path.read_bytes() == first
    assert first.decode() == "---\ntitle: Foo\nformat: dashboard\n---\nBody\n"


@pytest.mark.asyncio
async def test_dashboard_layout_keeps_other_keys(registry, ctx, write):
    path = write("dash.qmd", "---\ntitle: Foo\nauthor: Me\n---\n# Body\n")
    layout = {"rows": [{"height": "70%"}, {"height": "30%"}]}
    await run(
        registry, ctx, "quarto_define_dashboard_layout",
        qmd_file_path="dash.qmd", layout_structure=layout, orientation="rows",
    )
    doc = parse_front_matter(path.read_text())
    assert doc.header == {
        "title": "Foo",
        "author": "Me",
        "format": "dashboard",
        "layout": layout,
        "orientation": "rows",
    }
    assert doc.body == "# Body\n"


@pytest.mark.asyncio
async def test_dashboard_layout_rejects_bad_orientation(registry, ctx, write):
    write("dash.qmd", "---\ntitle: Foo\n---\n")
    with pytest.raises(ValidationError) as exc:
        await run(
            registry, ctx, "quarto_define_dashboard_layout",
            qmd_file_path="dash.qmd", layout_structure={}, orientation="diagonal",
        )
    assert exc.value.errors == ["orientation must be one of: rows, columns"]


@pytest.mark.asyncio
async def test_dashboard_logo(registry, ctx, write):
    path = write("dash.qmd", "---\nformat: dashboard\n---\n")
    await run(registry, ctx, "quarto_add_dashboard_logo", qmd_file_path="dash.qmd", logo_image_path="logo.png")
    assert parse_front_matter(path.read_text()).header == {"format": "dashboard", "logo": "logo.png"}


@pytest.mark.asyncio
async def test_dashboard_missing_file(registry, ctx):
    with pytest.raises(NotFoundError):
        await run(registry, ctx, "quarto_define_dashboard_format", qmd_file_path="missing.qmd")


@pytest.mark.asyncio
async def test_configure_site_yml_creates_config(registry, ctx, tmp_path):
    await run(
        registry, ctx, "quarto_configure_site_yml",
        quarto_yml_path="_quarto.yml",
        project_type="website",
        navigation_type="navbar",
        pages_list='["index.qmd", "about.qmd"]',
        theme_config='["cosmo", "custom.scss"]',
    )
    config = load_yaml_mapping(tmp_path / "_quarto.yml")
    assert config["project"] == {"type": "website", "output-dir": "_site"}
    assert config["website"]["navbar"]["left"] == [
        {"href": "index.qmd", "text": "Index"},
        {"href": "about.qmd", "text": "About"},
    ]
    assert config["format"]["html"]["theme"] == ["cosmo", "custom.scss"]


@pytest.mark.asyncio
async def test_configure_site_yml_keeps_existing_keys(registry, ctx, write, tmp_path):
    write("_quarto.yml", "project:\n  type: book\n  render: ['*.qmd']\nwebsite:\n  title: Mine\n")
    await run(
        registry, ctx, "quarto_configure_site_yml",
        quarto_yml_path="_quarto.yml", project_type="website",
        navigation_type="sidebar", pages_list=["a.qmd"],
    )
    config = load_yaml_mapping(tmp_path / "_quarto.yml")
    assert config["project"]["render"] == ["*.qmd"]
    assert config["project"]["type"] == "website"
    assert config["website"] == {"title": "Mine", "sidebar": {"contents": ["a.qmd"]}}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "extra, field",
    [
        ({"pages_list": "[1, 2]"}, "pages_list"),
        ({"theme_config": '["cosmo", 3]'}, "theme_config"),
        ({"theme_config": ["cosmo", {"file": "x.scss"}]}, "theme_config"),
    ],
)
async def test_configure_site_yml_rejects_non_string_items(registry, ctx, tmp_path, extra, field):
    with pytest.raises(ValueError, match=f"{field} must contain only strings"):
        await run(
            registry, ctx, "quarto_configure_site_yml",
            quarto_yml_path="_quarto.yml", project_type="website",
            navigation_type="navbar", **extra,
        )
    assert not (tmp_path / "_quarto.yml").exists()


@pytest.mark.asyncio
async def test_apply_scss_theme_appends_once(registry, ctx, write, tmp_path):
    write("_quarto.yml", "format:\n  html:\n    theme: cosmo\n    toc: true\n")
    for _ in range(2):
        out = await run(
            registry, ctx, "quarto_apply_scss_theme", quarto_yml_path="_quarto.yml", scss_file_path="custom.scss"
        )
    assert out["theme_config"] == ["cosmo", "custom.scss"]
    html = load_yaml_mapping(tmp_path / "_quarto.yml")["format"]["html"]
    assert html == {"theme": ["cosmo", "custom.scss"], "toc": True}


@pytest.mark.asyncio
async def test_publishing_workflow_then_schedule(registry, ctx, tmp_path):
    wf_path = ".github/workflows/publish.yml"
    await run(registry, ctx, "github_actions_configure_publishing_workflow", workflow_file_path=wf_path)
    await run(registry, ctx, "github_actions_schedule_workflow", workflow_yml_path=wf_path, cron_expression="0 13 * * *")
    # a second schedule replaces the first
    await run(registry, ctx, "github_actions_schedule_workflow", workflow_yml_path=wf_path, cron_expression="0  6 * * 1")

    path = tmp_path / wf_path
    workflow = load_yaml_mapping(path)
    assert workflow["on"]["schedule"] == [{"cron": "0 6 * * 1"}]
    assert workflow["on"]["push"] == {"branches": ["main"]}
    text = path.read_text()
    assert "\non:\n" in text
    assert "true:" not in text


@pytest.mark.asyncio
async def test_schedule_promotes_bare_trigger(registry, ctx, write, tmp_path):
    write("wf.yml", "name: x\non: push\njobs: {}\n")
    await run(registry, ctx, "github_actions_schedule_workflow", workflow_yml_path="wf.yml", cron_expression="*/15 * * * *")
    workflow = load_yaml_mapping(tmp_path / "wf.yml")
    assert workflow["on"] == {"push": None, "schedule": [{"cron": "*/15 * * * *"}]}


@pytest.mark.asyncio
async def test_schedule_rejects_short_cron(registry, ctx, write):
    write("wf.yml", "on: push\n")
    with pytest.raises(ValidationError):
        await run(registry, ctx, "github_actions_schedule_workflow", workflow_yml_path="wf.yml", cron_expression="0 8 *")


@pytest.mark.asyncio
async def test_define_workflow_env_on_every_job(registry, ctx, write, tmp_path):
    write("wf.yml", "on: push\njobs:\n  build:\n    runs-on: ubuntu-latest\n  deploy:\n    needs: build\n")
    out = await run(
        registry, ctx, "github_actions_define_workflow_env",
        workflow_yml_path="wf.yml", r_script_env_name="API_KEY", github_secret_name="MY_SECRET",
    )
    jobs = load_yaml_mapping(tmp_path / "wf.yml")["jobs"]
    for job in ("build", "deploy"):
        assert jobs[job]["env"] == {"API_KEY": "${{ secrets.MY_SECRET }}"}
    assert out["usage_in_r"] == 'Sys.getenv("API_KEY")'


@pytest.mark.asyncio
async def test_define_workflow_env_creates_build_job(registry, ctx, write, tmp_path):
    write("wf.yml", "on: push\n")
    await run(
        registry, ctx, "github_actions_define_workflow_env",
        workflow_yml_path="wf.yml", r_script_env_name="TOKEN", github_secret_name="TOKEN",
    )
    jobs = load_yaml_mapping(tmp_path / "wf.yml")["jobs"]
    assert list(jobs) == ["build"]
    assert jobs["build"]["env"] == {"TOKEN": "${{ secrets.TOKEN }}"}


@pytest.mark.asyncio
async def test_create_secret_never_echoes_value(registry, ctx):
    out = await run(
        registry, ctx, "github_actions_create_secret",
        repository_name="me/site", secret_name="API_KEY", secret_value="s3cr3t-value",
    )
    assert "s3cr3t-value" not in repr(out)
    assert "gh secret set API_KEY" in out["instructions"]


@pytest.mark.asyncio
async def test_monitor_without_repository_returns_instructions(registry, ctx):
    out = await run(registry, ctx, "github_actions_monitor_workflow", workflow_run_id=12345)
    assert out["workflow_run_id"] == "12345"
    assert "gh run view 12345 --log" in out["monitoring_instructions"]
    assert "status" not in out


@pytest.mark.asyncio
async def test_ojs_chunk_appended_after_body(registry, ctx, write):
    path = write("page.qmd", "---\ntitle: Page\n---\nIntro")
    out = await run(
        registry, ctx, "quarto_define_ojs_chunk",
        ojs_code_content="viewof x = Inputs.range([0, 10])", chunk_options=["echo: false"], qmd_file_path="page.qmd",
    )
    doc = parse_front_matter(path.read_text())
    assert doc.header == {"title": "Page"}
    assert doc.body == "Intro\n\n" + out["chunk_content"] + "\n"


@pytest.mark.asyncio
async def test_ojs_chunk_without_file(registry, ctx):
    out = await run(registry, ctx, "quarto_define_ojs_chunk", ojs_code_content="x = 1")
    assert out["chunk_content"] == "```{ojs}\nx = 1\n```"
    assert "paths_touched" not in out


@pytest.mark.asyncio
async def test_chunk_header_tools(registry, ctx):
    out = await run(registry, ctx, "quarto_configure_chunk_output", code_chunk_header="```{r plot}", echo=False)
    assert out["modified_header"] == "```{r plot, echo=FALSE}"
    out = await run(registry, ctx, "quarto_name_code_chunk", code_chunk_header="```{python}", chunk_name="Load Data")
    assert out["modified_header"] == "```{python load_data}"
    assert out["language"] == "python"


@pytest.mark.asyncio
async def test_create_gitignore_default_and_custom(registry, ctx, tmp_path):
    (tmp_path / "site").mkdir()
    await run(registry, ctx, "quarto_create_gitignore", target_folder="site")
    assert (tmp_path / "site" / ".gitignore").read_text() == DEFAULT_GITIGNORE
    assert ".env\n" in DEFAULT_GITIGNORE

    await run(registry, ctx, "quarto_create_gitignore", target_folder="site", gitignore_content="*.log\n")
    assert (tmp_path / "site" / ".gitignore").read_text() == "*.log\n"


@pytest.mark.asyncio
async def test_revealjs_slides(registry, ctx, tmp_path):
    out = await run(
        registry, ctx, "quarto_generate_revealjs_slides",
        target_folder="deck", title="My Talk", author="A. Speaker", theme_file="custom.scss",
        title_slide_background_image="bg.jpg",
    )
    slides = tmp_path / "deck" / "slides.qmd"
    doc = parse_front_matter(slides.read_text())
    revealjs = doc.header["format"]["revealjs"]
    assert doc.header["title"] == "My Talk"
    assert revealjs["theme"] == "custom.scss"
    assert revealjs["highlight-style"] == "atom-one"
    assert revealjs["title-slide-attributes"]["data-background-image"] == "bg.jpg"
    assert "# My Talk" in doc.body
    assert (tmp_path / "deck" / "styles.css").exists()
    assert out["paths_touched"] == [str(slides), str(tmp_path / "deck" / "styles.css")]
