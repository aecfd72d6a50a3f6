"""Interactive project scaffolding for ``framekit create``."""

from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Sequence

from .exceptions import ChildProcessFailed, PathInvalid
from .template import TemplateRenderer
from .ui import Interaction

logger = logging.getLogger(__name__)

DEFAULT_ROOT_PATH = "./hello-framekit"
TEMPLATES_DIR = Path(__file__).parent / "templates"
PACKAGE_MANAGERS = ("npm", "yarn")
GETTING_STARTED_URL = "https://framekit.dev/getting-started"

ERROR_NOT_WRITABLE = "Path is not writable."
ERROR_FILE_EXISTS = "File already exists."
ERROR_DIRECTORY_NOT_EMPTY = "Directory is not empty."


def run_command(args: Sequence[str], cwd: str | Path) -> None:
    """Run ``args`` in ``cwd``, raising ChildProcessFailed on any failure."""
    command = shlex.join(args)
    logger.debug("Running `%s` in %s", command, cwd)
    try:
        subprocess.run(list(args), cwd=cwd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        raise ChildProcessFailed(command, e.returncode, e.stderr or e.stdout or "") from e
    except OSError as e:
        raise ChildProcessFailed(command, None, str(e)) from e


@dataclass
class CreateEffects:
    """Everything ``create`` touches outside of plain computation."""

    ui: Interaction
    run: Callable[[Sequence[str], str | Path], None] = run_command
    renderer: TemplateRenderer = field(default_factory=TemplateRenderer)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    templates_dir: Path = TEMPLATES_DIR


def can_write_recursive(root_path: str) -> bool:
    """Whether the nearest existing ancestor of ``root_path`` is writable."""
    while True:
        parent = os.path.dirname(root_path)
        if os.access(parent or ".", os.W_OK):
            return True
        if parent == root_path:
            return False
        root_path = parent


def validate_root_path(root_path: str) -> str | None:
    """Return why ``root_path`` can't hold a new project, or None if it can.

    An empty string stands for the prompt's default and is always accepted.
    """
    if root_path == "":
        return None
    root_path = os.path.normpath(root_path)
    if not can_write_recursive(root_path):
        return ERROR_NOT_WRITABLE
    if not os.path.exists(root_path):
        return None
    if not os.path.isdir(root_path):
        return ERROR_FILE_EXISTS
    if os.listdir(root_path):
        return ERROR_DIRECTORY_NOT_EMPTY
    return None


def infer_package_manager(environ: Mapping[str, str]) -> str | None:
    """Guess the package manager from the ``npm_config_user_agent`` variable.

    The agent string looks like ``yarn/1.22.19 npm/? node/v20.10.0 darwin arm64``.
    """
    user_agent = environ.get("npm_config_user_agent")
    if not user_agent:
        return None
    pkg_spec = user_agent.split(" ")[0]
    name, _, version = pkg_spec.partition("/")
    if not name or not version:
        return None
    return name


def build_template_context(root_path: str, package_manager: str | None) -> dict[str, str]:
    title = os.path.basename(os.path.normpath(root_path))
    if package_manager == "yarn":
        run = install = "yarn"
    else:
        run = f"{package_manager or 'npm'} run"
        install = f"{package_manager or 'npm'} install"
    return {
        "runCommand": run,
        "installCommand": install,
        "rootPath": root_path,
        "projectTitle": title,
        "projectTitleString": json.dumps(title),
    }


def create(effects: CreateEffects) -> Path:
    """Prompt for project options, then write the new project to disk.

    Raises:
        PromptCancelled: If the user cancels a prompt.
        UnresolvedPlaceholder: If a template uses an unknown variable. Files
            already copied are left in place.
        ChildProcessFailed: If installing dependencies or git setup fails.
    """
    ui = effects.ui
    ui.intro("framekit create")

    root_path = ui.text(
        "Where to create your project?",
        default=DEFAULT_ROOT_PATH,
        placeholder=DEFAULT_ROOT_PATH,
        validate=validate_root_path,
    )
    error = validate_root_path(root_path)
    if error:
        raise PathInvalid(error)

    include_sample_files = ui.select(
        "Include sample files to help you get started?",
        [
            (True, "Yes, include sample files", "recommended"),
            (False, "No, create an empty project", None),
        ],
        initial_value=True,
    )
    package_manager = ui.select(
        "Install dependencies?",
        [
            ("npm", "Yes, via npm", "recommended"),
            ("yarn", "Yes, via yarn", "recommended"),
            (None, "No", None),
        ],
        initial_value=infer_package_manager(effects.environ),
    )
    initialize_git = ui.confirm("Initialize git repository?")

    spinner = ui.spinner()
    spinner.start("Copying template files")
    template = "default" if include_sample_files else "empty"
    context = build_template_context(root_path, package_manager)
    try:
        effects.renderer.render(effects.templates_dir / template, root_path, context)
        if package_manager:
            spinner.message(f"Installing dependencies via {package_manager}")
            effects.run(shlex.split(context["installCommand"]), root_path)
        if initialize_git:
            spinner.message("Initializing git repository")
            effects.run(["git", "init"], root_path)
            effects.run(["git", "add", "-A"], root_path)
    except Exception:
        spinner.stop("Failed to create project.", failed=True)
        raise
    spinner.stop("Installed!")

    instructions = [f"cd {root_path}"]
    if not package_manager:
        instructions.append(context["installCommand"])
    instructions.append(f"{context['runCommand']} dev")
    ui.note("\n".join(f"[cyan]{line}[/cyan]" for line in instructions), "Next steps…")
    ui.outro(f"Problems? [underline]{GETTING_STARTED_URL}[/underline]")
    return Path(root_path)
