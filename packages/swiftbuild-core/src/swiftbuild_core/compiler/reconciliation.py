"""Reconciliation of generator output with declared outputs.

Some plugins (protoc-gen-grpc-swift, for one) only generate files for the
protos that contain something relevant to them, and which ones that is cannot
be known before the plugin runs. The host build system, however, requires
every declared output to exist. So generation happens in two phases:

1. The generator writes into a scratch directory.
2. The reconciliation action copies each declared file out of the scratch
   directory, or writes an empty file where the plugin produced nothing.

``ReconciliationStage`` emits the action pair for step 2.
``apply_reconciliation`` performs the same protocol locally.
"""

from __future__ import annotations

import logging
import posixpath
import shlex
import shutil
from collections.abc import Iterable, Sequence
from importlib import resources
from pathlib import Path

from swiftbuild_core.compiler.models import RECONCILE_MNEMONIC
from swiftbuild_core.errors import InvalidConfigurationError, IOFailureError
from swiftbuild_core.planner.file_system import FileSystem
from swiftbuild_core.schemas.actions import ExpandTemplateAction, RunAction
from swiftbuild_core.schemas.files import FileHandle
from swiftbuild_core.schemas.target import TargetIdentity

logger = logging.getLogger(__name__)

COPY_SOURCES_TEMPLATE_NAME = "copy_swift_sources.sh.tpl"
COPY_SOURCES_SCRIPT_NAME = "copy_swift_sources.sh"
BUNDLED_TEMPLATE_PREFIX = "swiftbuild_core:"

TEMPORARY_DIRECTORY_PLACEHOLDER = "{temporary_output_directory_path}"
PERMANENT_DIRECTORY_PLACEHOLDER = "{permanent_output_directory_path}"
SOURCE_PATHS_PLACEHOLDER = "{swift_source_file_paths}"


def default_copy_sources_template() -> str:
    """Return the identifier of the bundled copy-script template.

    The identifier names a package resource rather than an install location,
    so plans that reference it stay valid on other machines.
    """
    return f"{BUNDLED_TEMPLATE_PREFIX}templates/{COPY_SOURCES_TEMPLATE_NAME}"


def read_copy_sources_template(template: str | None = None) -> str:
    """Return the text of ``template``, or of the bundled template when None.

    ``template`` is either a bundled template identifier, as returned by
    :func:`default_copy_sources_template`, or a file path.
    """
    if template is None:
        template = default_copy_sources_template()
    if template.startswith(BUNDLED_TEMPLATE_PREFIX):
        resource = template.removeprefix(BUNDLED_TEMPLATE_PREFIX)
        return (
            resources.files("swiftbuild_core")
            .joinpath(*resource.split("/"))
            .read_text(encoding="utf-8")
        )
    return Path(template).read_text(encoding="utf-8")


class ReconciliationStage:
    """Emits the copy-or-fill actions for one (target, plugin) pair.

    Attributes:
        file_system: Where the copy script is declared.
        target: Build unit identity.
        plugin_name: Plugin whose scratch directory is reconciled.
    """

    def __init__(self, file_system: FileSystem, target: TargetIdentity, plugin_name: str) -> None:
        self.file_system = file_system
        self.target = target
        self.plugin_name = plugin_name

    def reconcile(
        self,
        temporary_directory: FileHandle,
        permanent_directory: str,
        declared_outputs: Sequence[FileHandle],
        template: str | None = None,
    ) -> tuple[ExpandTemplateAction, RunAction]:
        """Build the script expansion and the single action that runs it.

        The returned RunAction reads only the scratch directory and outputs
        every declared path; it succeeds whether or not the plugin generated
        each of them.

        Args:
            temporary_directory: Scratch directory the generator wrote into.
            permanent_directory: Directory containing every declared output.
            declared_outputs: Files the host expects to exist.
            template: Custom copy-script template path. Defaults to the bundled
                template identifier.

        Returns:
            Tuple of (template expansion, script run).
        """
        if not declared_outputs:
            raise InvalidConfigurationError("Nothing to reconcile: no declared outputs")

        script = self.file_system.declare_file(
            posixpath.join(self.target.name, self.plugin_name, COPY_SOURCES_SCRIPT_NAME)
        )
        expand = ExpandTemplateAction(
            template=template or default_copy_sources_template(),
            output=script,
            substitutions={
                TEMPORARY_DIRECTORY_PLACEHOLDER: shlex.quote(temporary_directory.path),
                PERMANENT_DIRECTORY_PLACEHOLDER: shlex.quote(permanent_directory),
                SOURCE_PATHS_PLACEHOLDER: " ".join(
                    shlex.quote(output.path) for output in declared_outputs
                ),
            },
            is_executable=True,
        )
        run = RunAction(
            executable=script,
            inputs=(temporary_directory,),
            outputs=tuple(declared_outputs),
            mnemonic=RECONCILE_MNEMONIC,
            progress_message=f"Copying protos into {permanent_directory}",
        )
        logger.debug(
            "Reconciling %d outputs for %s (%s)",
            len(declared_outputs),
            self.target.label,
            self.plugin_name,
        )
        return expand, run


def _is_within(path: Path, directory: Path) -> bool:
    depth = len(directory.parts)
    return len(path.parts) > depth and path.parts[:depth] == directory.parts


def apply_reconciliation(
    temporary_directory: Path | str,
    permanent_directory: Path | str,
    declared_paths: Iterable[Path | str],
) -> list[Path]:
    """Copy or fill every declared path. Safe to run any number of times.

    Relative declared paths are always joined to ``permanent_directory``,
    even when they begin with its name. Absolute declared paths must lie
    inside it. A declared file missing from the scratch directory is expected
    and produces an empty file.

    Args:
        temporary_directory: Scratch directory the generator wrote into.
        permanent_directory: Directory containing the declared outputs.
        declared_paths: Declared output paths.

    Returns:
        The written paths, in declaration order.

    Raises:
        InvalidConfigurationError: If a declared path lies outside
            ``permanent_directory``.
        IOFailureError: If a declared path cannot be written.
    """
    temporary = Path(temporary_directory)
    permanent = Path(permanent_directory)
    written: list[Path] = []
    copied = 0

    for declared in declared_paths:
        declared_path = Path(declared)
        relative: Path | None
        if declared_path.is_absolute():
            destination = declared_path
            root = permanent.absolute()
            relative = declared_path.relative_to(root) if _is_within(declared_path, root) else None
        else:
            destination = permanent / declared_path
            relative = declared_path

        if relative is None or ".." in relative.parts:
            raise InvalidConfigurationError(
                f"Declared output {declared} is outside {permanent}",
                field_path="declared_paths",
                value=str(declared),
            )

        generated = temporary / relative
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists() or destination.is_symlink():
                destination.unlink()
            if generated.is_file():
                shutil.copyfile(generated, destination)
                copied += 1
            else:
                destination.write_bytes(b"")
        except OSError as e:
            raise IOFailureError(str(destination), internal_details=str(e)) from e
        written.append(destination)

    logger.info(
        "Reconciled %d declared outputs into %s (%d copied, %d empty)",
        len(written),
        permanent,
        copied,
        len(written) - copied,
    )
    return written
