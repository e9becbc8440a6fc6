"""Version control access used by the commit browser."""

from difftrail.vcs.git import GitRepository, changed_files

__all__ = ["GitRepository", "changed_files"]
