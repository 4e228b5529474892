"""
This module contains helper typehints for the cramsqs package.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import List, Union

# type alias for path-like objects
PathType = Union[str, Path, PurePath, os.PathLike]

# archive files selected from a single path argument, as given to the decoder
CandidatePaths = List[str]
