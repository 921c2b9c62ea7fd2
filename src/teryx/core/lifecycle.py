# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/core/lifecycle.py

"""
Repository lifecycle workflows: init, clone and transfer.

Each workflow is a linear chain of external calls where every step is a
precondition for the next. The first failure raises and aborts the rest;
nothing already created on disk is cleaned up, so a rerun may need the
user to remove leftovers first.
"""

from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from teryx.config.manager import UserConfig
from teryx.core.models import (
    InitOptions, InitResult,
    CloneOptions, CloneResult,
    TransferOptions, TransferResult,
)
from teryx.core.naming import (
    normalize_repo_name,
    strip_fossil_suffix,
    relative_repo_path,
    parse_clone_url,
    layout_for_source,
    strip_home_suffix,
    split_destination,
    remote_file_path,
    build_remediation_command,
)
from teryx.core.protocols import ProcessRunner
from teryx.system.display import display_info, display_warning, display_success, display_remediation
from teryx.system.exceptions import ExternalCommandError, FilesystemError, TeryxError, ValidationError
from teryx.system.host_utils import LocalIdentity, current_identity


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to create directory {path}: {e}", path=str(path)) from e
    logger.debug(f"Ensured directory {path}")


# ---- Init ----

def init_repository(
    options: InitOptions,
    runner: ProcessRunner,
    console: Console,
    config: Optional[UserConfig] = None,
    base_dir: Optional[Path] = None,
    quiet: bool = False
) -> InitResult:
    """Create a new Fossil repository with an opened checkout and a known admin password.

    `fossil new` creates an admin account named after the invoking system
    user with a random password. This workflow then sets that account's
    password and makes it the checkout's default user. When --user names
    some other account, Fossil has to already know it for the password step
    to succeed.

    Args:
        options: Repository name, admin password, optional admin user name
        runner: Process runner used for every external call
        console: Rich console for output
        config: User config (executable names); defaults when None
        base_dir: Directory to create the repository in (default: cwd)
        quiet: Suppress informational messages

    Returns:
        InitResult with the repository file, checkout directory and admin user

    Raises:
        ValidationError: Missing password or unusable name; raised before any
            external call
        ExternalCommandError: Any fossil/whoami invocation failed
        FilesystemError: The checkout directory could not be created
    """
    config = config or UserConfig()

    if not options.password:
        raise ValidationError("--password is required")
    if not options.name or not strip_fossil_suffix(options.name):
        raise ValidationError("Repository name must not be empty")
    if "/" in options.name:
        raise ValidationError(
            f"Repository name '{options.name}' must not contain '/'; run init from the target directory"
        )

    repo_file = normalize_repo_name(options.name)
    if repo_file != options.name:
        display_info(console, f"Appending .fossil extension. Repository file will be: {repo_file}", quiet)

    username = options.user
    if not username:
        username = runner.run_capturing(config.whoami_bin).stdout
        if not username:
            raise TeryxError(f"'{config.whoami_bin}' returned an empty user name")
        display_info(console, f"No --user specified. Defaulting to current user: {username}", quiet)

    base = base_dir or Path.cwd()
    console.print(f"Initializing new repository '{escape(repo_file)}' for user '{escape(username)}'...")
    logger.info(f"Initializing {repo_file} in {base} for {username}")

    runner.run_interactive(base_dir, config.fossil_bin, "new", repo_file)

    checkout_dir = base / strip_fossil_suffix(repo_file)
    _make_dirs(checkout_dir)

    runner.run_interactive(checkout_dir, config.fossil_bin, "open", relative_repo_path(repo_file))
    runner.run_interactive(checkout_dir, config.fossil_bin, "user", "password", username, options.password)
    runner.run_interactive(checkout_dir, config.fossil_bin, "user", "default", username)

    checkout_dir = checkout_dir.resolve()
    display_success(console, f"Repository initialized and opened in: {checkout_dir}")
    return InitResult(repo_file=base.resolve() / repo_file, checkout_dir=checkout_dir, user=username)


# ---- Clone ----

def clone_repository(
    options: CloneOptions,
    runner: ProcessRunner,
    console: Console,
    config: Optional[UserConfig] = None,
    identity: Optional[LocalIdentity] = None,
    quiet: bool = False
) -> CloneResult:
    """Clone a remote repository into <home>/fossils/<host>/<remote parent path>.

    The repository file lands in the target directory and is opened in a
    sibling checkout directory named after it. The invoking user's name is
    embedded in the clone URL without a password; fossil prompts for it.

    Raises:
        ValidationError: Malformed URL
        FilesystemError: Target or checkout directory could not be created
        ExternalCommandError: fossil clone or fossil open failed
    """
    config = config or UserConfig()

    clean_url = strip_home_suffix(options.url)
    console.print(f"Cloning from '{escape(clean_url)}'...")
    source = parse_clone_url(clean_url)
    identity = identity or current_identity()

    layout = layout_for_source(source, identity.username, config.fossils_dir(identity.home))
    display_info(console, f"Local target directory will be: {layout.target_dir}", quiet)
    logger.info(f"Cloning {layout.clean_url} into {layout.target_dir}")

    _make_dirs(layout.target_dir)
    runner.run_interactive(layout.target_dir, config.fossil_bin, "clone", layout.auth_url, layout.repo_file)

    _make_dirs(layout.checkout_dir)
    runner.run_interactive(layout.checkout_dir, config.fossil_bin, "open", relative_repo_path(layout.repo_file))

    display_success(console, f"Repo cloned and opened in: {layout.checkout_dir}")
    return CloneResult(
        auth_url=layout.auth_url,
        target_dir=layout.target_dir,
        repo_file=layout.target_dir / layout.repo_file,
        checkout_dir=layout.checkout_dir
    )


# ---- Transfer ----

def transfer_repository(
    options: TransferOptions,
    runner: ProcessRunner,
    console: Console,
    config: Optional[UserConfig] = None,
    quiet: bool = False
) -> TransferResult:
    """Copy a repository file to user@host:path, then print the permission fix.

    scp is tried first. If it fails, sftp is tried exactly once with a
    piped 'put' instruction. Each mechanism runs at most once; there are no
    retries. The chown/chmod command for the server is printed, never run.

    Raises:
        ValidationError: Missing destination, or a destination without
            user@host: (checked when sftp or the remediation needs it)
        ExternalCommandError: Both scp and sftp failed
    """
    config = config or UserConfig()

    if not options.destination:
        raise ValidationError("--destination is required")

    destination = options.destination
    console.print(f"Attempting to transfer '{escape(options.file)}' to '{escape(destination)}' via scp...")

    mechanism = "scp"
    try:
        runner.run_interactive(None, config.scp_bin, options.file, destination)
    except ExternalCommandError as e:
        display_warning(console, f"scp failed: {e}")
        display_info(console, "Falling back to sftp...", quiet)
        logger.warning(f"scp to {destination} failed, falling back to sftp")

        user_host, remote_path = split_destination(destination)
        mechanism = "sftp"
        try:
            runner.run_with_input(f"put {options.file} {remote_path}", config.sftp_bin, user_host)
        except ExternalCommandError as sftp_error:
            raise ExternalCommandError(
                f"sftp fallback also failed: {sftp_error}",
                command=sftp_error.command,
                returncode=sftp_error.returncode
            ) from sftp_error

    user_host, remote_path = split_destination(destination)
    command = build_remediation_command(
        user_host,
        remote_file_path(remote_path, options.file),
        options.remote_user
    )

    display_success(console, f"Repository transferred via {mechanism}.")
    display_remediation(console, options.remote_user, command)
    return TransferResult(
        file=options.file,
        destination=destination,
        mechanism=mechanism,
        remediation_command=command
    )
