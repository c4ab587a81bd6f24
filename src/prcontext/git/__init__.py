"""Version control layer: remote parsing, ref synchronization and diffs."""

from prcontext.git.client import GitClient, VersionControlClient
from prcontext.git.remote import RemoteIdentity, parse_remote_url

__all__ = ["GitClient", "RemoteIdentity", "VersionControlClient", "parse_remote_url"]
