#!/usr/bin/env python3
"""Copyright (c) 2024 Pixelgen Technologies AB.

Check that every python file in cram-sqs starts with a copyright notice

Do not delete the shebang on top of the file or it will stop working
"""
import ast
import sys
from itertools import chain
from pathlib import Path
from typing import Iterable, Iterator, Optional

ROOT_DIR = Path(__file__).parent / ".."
SOURCE_DIR = ROOT_DIR / "src/cramsqs"
TEST_DIR = ROOT_DIR / "tests"
PYTHON_DIRS = [SOURCE_DIR, TEST_DIR]
NOTICES = ("Copyright (c)", "Copyright ©")


class CopyrightNoticeMissing(Exception):
    """Raised for a python source file without a copyright notice.

    :param message: a message of exception
    :param offending_file: the file with no copyright
    """

    def __init__(self, message: str, offending_file: Path) -> None:
        """Construct instance."""
        super().__init__(message)
        self.file = offending_file


def check_file_for_copyright(py_file: Path) -> Optional[CopyrightNoticeMissing]:
    """Check the module docstring of a file for a copyright notice.

    :param py_file: a python file
    :return: missing notice class if copyright not present in file
    """
    tree = ast.parse(py_file.read_text())
    module_docstring = ast.get_docstring(tree, clean=True)
    if not module_docstring:
        return CopyrightNoticeMissing("Module docstring missing", py_file.resolve())
    if not any(notice in module_docstring for notice in NOTICES):
        return CopyrightNoticeMissing(
            "Copyright notice missing from module docstring", py_file.resolve()
        )
    return None


def find_missing(files: Optional[Iterable[Path]]) -> Iterator[CopyrightNoticeMissing]:
    """Yield an error for every file lacking a notice.

    :param files: files to check, all files in the source and test dirs if None
    """
    files_to_check = files or chain.from_iterable(
        directory.rglob("*.py") for directory in PYTHON_DIRS
    )
    for py_file in files_to_check:
        error = check_file_for_copyright(py_file)
        if error:
            yield error


def check_copyright(files: Optional[Iterable[Path]]):
    """Check a list of files for copyright and exit with 1 on missing notices.

    :param files: files to check
    """
    found_errors = list(find_missing(files))
    if found_errors:
        print("A copyright notice is missing from the following files:")
        for exception in found_errors:
            print(exception.file, str(exception), sep=": ")
        sys.exit(1)

    print("All .py files have a copyright notice")


# Add arguments to script to check list of files
if __name__ == "__main__":
    if len(sys.argv) > 1:
        check_copyright([Path(p) for p in sys.argv[1:]])
    else:
        check_copyright(None)
