import sys

import atheris
from helpers import EnhancedDataProvider

with atheris.instrument_imports():
    from formdata.boundary import read_boundary
    from formdata.exceptions import BoundaryError


def TestOneInput(data: bytes) -> None:
    fdp = EnhancedDataProvider(data)
    try:
        read_boundary(fdp.ConsumeRandomString())
    except BoundaryError:
        return


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
