from typing import Protocol

from i18n_infuser.models import FileDescriptor, SfcFile


class SfcParser(Protocol):
    def parse(self, source: SfcFile, base_path: str) -> FileDescriptor: ...
