from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Union


@dataclass(frozen=True)
class FormFile:
    """Reference to a file to upload as a multipart file part.

    Only the path is stored; the file itself is never opened here.
    """

    path: Union[str, os.PathLike]

    @property
    def filename(self) -> str:
        return PurePath(os.fspath(self.path)).name
