# extpolicy/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Mapping, Sequence, Union

ExtensionId = str
ExtensionKey = str
ExtensionPointName = str

# Raw shapes handed over by collaborators, before normalization
RawExtensionKind = Union[str, Sequence[str]]
ConfiguredExtensionKinds = Mapping[ExtensionId, RawExtensionKind]
ProductExtensionKinds = Mapping[ExtensionId, Sequence[str]]
ProductWorkspaceTrust = Mapping[ExtensionId, Any]
