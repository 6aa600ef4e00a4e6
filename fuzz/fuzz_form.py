import sys

import atheris
from helpers import EnhancedDataProvider

with atheris.instrument_imports():
    from formdata.exceptions import FormDataError
    from formdata.formdata import parse_form_data

BOUNDARY = "boundary"


def parse_random_bytes(fdp: EnhancedDataProvider) -> None:
    parse_form_data(fdp.ConsumeRandomBytes(), BOUNDARY)


def parse_random_headers(fdp: EnhancedDataProvider) -> None:
    headers = b"".join(fdp.ConsumeHeaderLine() for _ in range(fdp.ConsumeIntInRange(0, 4)))
    body = (
        f"--{BOUNDARY}\r\n".encode()
        + headers
        + b"\r\n"
        + fdp.ConsumeRandomBytes()
        + f"\r\n--{BOUNDARY}--\r\n".encode()
    )
    parse_form_data(body, BOUNDARY)


def parse_random_body(fdp: EnhancedDataProvider) -> None:
    body = (
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="field"\r\n\r\n'
        f"{fdp.ConsumeRandomString()}\r\n"
        f"--{BOUNDARY}--\r\n"
    )
    parse_form_data(body.encode("utf-8", errors="ignore"), BOUNDARY)


def TestOneInput(data: bytes) -> None:
    fdp = EnhancedDataProvider(data)
    targets = [parse_random_bytes, parse_random_headers, parse_random_body]
    target = fdp.PickValueInList(targets)

    try:
        target(fdp)
    except FormDataError:
        return


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
