import atheris


class EnhancedDataProvider(atheris.FuzzedDataProvider):
    def ConsumeRandomBytes(self) -> bytes:
        return self.ConsumeBytes(self.ConsumeIntInRange(0, self.remaining_bytes()))

    def ConsumeRandomString(self) -> str:
        return self.ConsumeUnicodeNoSurrogates(self.ConsumeIntInRange(0, self.remaining_bytes()))

    def ConsumeHeaderLine(self) -> bytes:
        header = self.PickValueInList([b"Content-Disposition: form-data; ", b"Content-Type: ", b""])
        return header + self.ConsumeBytes(self.ConsumeIntInRange(0, 64)) + b"\r\n"
