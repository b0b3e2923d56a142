"""
Turns publish configuration strings into concrete delete and upload targets.
"""
from pathlib import Path
from string import Template
from typing import List, Mapping, Tuple
from loguru import logger

from ..models.config import PublishConfig
from ..models.data_models import DeleteTarget, SyncTarget
from .keys import normalize_key


def expand_variables(template: str, env: Mapping[str, str]) -> str:
    """Substitute $NAME and ${NAME} from env; unknown names are kept verbatim."""
    return Template(template).safe_substitute(env)


def resolve_local_path(local_path: str, workspace: str) -> Path:
    """Resolve a configured local path against the workspace directory."""
    return Path(workspace) / normalize_key(local_path)


def resolve_targets(config: PublishConfig,
                    env: Mapping[str, str]) -> Tuple[List[DeleteTarget], List[SyncTarget]]:
    """
    Build the delete and upload targets for one run.

    Every path is expanded against env first. A single local path is paired
    with every remote path; otherwise local and remote paths pair up by
    position.

    Args:
        config: Validated publish configuration
        env: Variables available for expansion

    Returns:
        Tuple of (delete targets, upload targets) in configuration order
    """
    delete_targets = [
        DeleteTarget(remote_prefix=expand_variables(path, env))
        for path in config.delete_remote_paths
    ]

    local_paths = config.local_paths
    remote_paths = config.remote_paths
    if len(local_paths) == 1:
        local_paths = local_paths * len(remote_paths)

    upload_targets = []
    for local_path, remote_path in zip(local_paths, remote_paths):
        expanded_local = expand_variables(local_path, env)
        expanded_remote = expand_variables(remote_path, env)
        logger.info(f"Expanded local path: {expanded_local}")
        logger.info(f"Expanded remote path: {expanded_remote}")
        upload_targets.append(SyncTarget(
            local_path=resolve_local_path(expanded_local, config.workspace),
            remote_key=expanded_remote
        ))

    return delete_targets, upload_targets
