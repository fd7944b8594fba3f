from __future__ import annotations

from .registry import ToolRegistry

from .builtin_tools.project_tool import CreateProjectTool
from .builtin_tools.renv_tools import RenvInstallPackageTool, RenvSnapshotTool, RenvStatusTool
from .builtin_tools.dashboard_tools import (
    AddDashboardLogoTool,
    DefineDashboardFormatTool,
    DefineDashboardLayoutTool,
)
from .builtin_tools.site_tools import (
    ApplyScssThemeTool,
    ConfigureSiteYmlTool,
    CreateGitignoreTool,
    RenderLocalTool,
)
from .builtin_tools.chunk_tools import ConfigureChunkOutputTool, DefineOjsChunkTool, NameCodeChunkTool
from .builtin_tools.slides_tool import RevealJsSlidesTool
from .builtin_tools.github_tools import (
    ConfigurePagesSourceTool,
    CreateGhPagesBranchTool,
    CreateRepositoryTool,
    GitPushProjectTool,
)
from .builtin_tools.workflow_tools import (
    ConfigurePublishingWorkflowTool,
    CreateSecretTool,
    DefineWorkflowEnvTool,
    MonitorWorkflowTool,
    RerunWorkflowTool,
    ScheduleWorkflowTool,
)
from .builtin_tools.openai_tools import CustomScssTool, GenerateImageTool, ThemeRecommendationsTool
from .builtin_tools.cron_tool import CronExpressionTool
from .builtin_tools.ojs_tools import DropdownMenuTool, DynamicIframeUpdateTool, TransposeDataTool
from .builtin_tools.r_tools import (
    DownloadFileTool,
    GetEnvironmentVariableTool,
    GtCreateTableTool,
    Httr2ApiAccessTool,
    JsonParseTool,
    OjsDefineDataTool,
    StoreRenvironSecretTool,
    ZipFilesTool,
)
from .builtin_tools.embed_tools import ShinyEmbedTool, SpotifyEmbedTool, YoutubeEmbedTool
from .builtin_tools.html_tool import IframeAttributesTool


def register_builtin_tools(registry: ToolRegistry, *, quiet: bool = False) -> None:
    tools = [
        # project and packages
        CreateProjectTool(),
        RenvInstallPackageTool(),
        RenvSnapshotTool(),
        RenvStatusTool(),
        # dashboards
        DefineDashboardFormatTool(),
        DefineDashboardLayoutTool(),
        AddDashboardLogoTool(),
        # site configuration
        ConfigureSiteYmlTool(),
        RenderLocalTool(),
        CreateGitignoreTool(),
        DefineOjsChunkTool(),
        ApplyScssThemeTool(),
        ConfigureChunkOutputTool(),
        NameCodeChunkTool(),
        RevealJsSlidesTool(),
        # github
        CreateRepositoryTool(),
        GitPushProjectTool(),
        CreateGhPagesBranchTool(),
        ConfigurePublishingWorkflowTool(),
        ScheduleWorkflowTool(),
        ConfigurePagesSourceTool(),
        # openai
        ThemeRecommendationsTool(),
        GenerateImageTool(),
        CustomScssTool(),
        CronExpressionTool(),
        # ojs
        TransposeDataTool(),
        DropdownMenuTool(),
        DynamicIframeUpdateTool(),
        # github actions
        CreateSecretTool(),
        DefineWorkflowEnvTool(),
        MonitorWorkflowTool(),
        RerunWorkflowTool(),
        # R helpers
        StoreRenvironSecretTool(),
        GetEnvironmentVariableTool(),
        OjsDefineDataTool(),
        Httr2ApiAccessTool(),
        GtCreateTableTool(),
        DownloadFileTool(),
        JsonParseTool(),
        ZipFilesTool(),
        # embeds
        YoutubeEmbedTool(),
        SpotifyEmbedTool(),
        ShinyEmbedTool(),
        IframeAttributesTool(),
    ]
    for tool in tools:
        tool.quiet = quiet
        registry.register(tool)


def build_registry(*, quiet: bool = False) -> ToolRegistry:
    """A fresh registry holding every built-in tool."""
    registry = ToolRegistry()
    register_builtin_tools(registry, quiet=quiet)
    return registry
