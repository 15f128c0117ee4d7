"""Release tag creation and publishing"""

import logging
from pathlib import Path
from typing import Union

from ..api.exceptions import TagExistsError, TagCreateError, TagPushError
from ..constants import DEFAULT_REMOTE
from ..utils.git_utils import (
    tag_exists,
    create_annotated_tag,
    push_tag,
    get_head_commit,
    get_remote_url,
)


class TagManager:
    """Create and push release tags in one repository

    An existing tag is never moved or overwritten.
    """

    def __init__(self, repo_path: Union[str, Path]):
        self.repo_path = Path(repo_path)
        self.logger = logging.getLogger(self.__class__.__name__)

    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag at HEAD

        Raises:
            TagExistsError: If the tag already exists
            TagCreateError: If git fails for any other reason
        """
        try:
            if tag_exists(self.repo_path, name):
                raise TagExistsError(name)

            ok, stderr = create_annotated_tag(self.repo_path, name, message)
        except FileNotFoundError:
            raise TagCreateError(name, "git is not installed")

        if not ok:
            raise TagCreateError(name, stderr or "git tag failed")

        self.logger.info(f"Created tag {name} at {get_head_commit(self.repo_path)}")

    def push_tag(self, name: str, remote: str = DEFAULT_REMOTE) -> None:
        """Push one tag to ``remote``

        Raises:
            TagPushError: If the remote is unknown or the push is rejected
        """
        try:
            if get_remote_url(self.repo_path, remote) is None:
                raise TagPushError(name, remote, f"remote '{remote}' is not configured")

            ok, stderr = push_tag(self.repo_path, name, remote)
        except FileNotFoundError:
            raise TagPushError(name, remote, "git is not installed")

        if not ok:
            raise TagPushError(name, remote, stderr or "git push failed")

        self.logger.info(f"Pushed tag {name} to {remote}")
