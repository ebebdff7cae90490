"""Git operations used by the release pipeline.

Usage:
    from shipwright.git import Repository

    repo = Repository(Path("/path/to/project"))
    repo.add_all()
    repo.commit("released v1.2.4")
"""

from shipwright.git.repository import Repository

__all__ = ["Repository"]
