# ref_indexer/decode/action_decoder.py

from typing import Any, Dict, Mapping, Optional, Tuple, Type

import msgspec
from msgspec import Struct

from ..types import (
    ActionKind,
    Action,
    CreateAccountAction,
    DeployContractAction,
    FunctionCallAction,
    TransferAction,
    StakeAction,
    AddKeyAction,
    DeleteKeyAction,
    DeleteAccountAction,
)


ACTION_TYPES: Dict[ActionKind, Type[Struct]] = {
    ActionKind.CREATE_ACCOUNT: CreateAccountAction,
    ActionKind.DEPLOY_CONTRACT: DeployContractAction,
    ActionKind.FUNCTION_CALL: FunctionCallAction,
    ActionKind.TRANSFER: TransferAction,
    ActionKind.STAKE: StakeAction,
    ActionKind.ADD_KEY: AddKeyAction,
    ActionKind.DELETE_KEY: DeleteKeyAction,
    ActionKind.DELETE_ACCOUNT: DeleteAccountAction,
}

_KIND_BY_TYPE: Dict[Type[Struct], ActionKind] = {cls: kind for kind, cls in ACTION_TYPES.items()}
_KIND_BY_TAG: Dict[str, ActionKind] = {kind.value: kind for kind in ACTION_TYPES}


class _ActionTag(Struct):
    kind: Optional[str] = None


class ActionDecoder:
    """Classifies a single action value and exposes its typed view.

    Accepts an already typed action struct, the raw JSON of one action, or
    that JSON already decoded to a mapping. Other values raise ``TypeError``.
    Raw values and mappings are read for their ``kind`` tag first, so a kind this
    indexer does not know classifies as ``ActionKind.UNKNOWN`` instead of
    failing. A known kind whose body does not match its struct raises
    ``msgspec.ValidationError``; producing well-formed actions is the job of
    the layer that hands them over.
    """

    def __init__(self):
        self._tag_decoder = msgspec.json.Decoder(_ActionTag)
        self._decoders = {
            kind: msgspec.json.Decoder(cls) for kind, cls in ACTION_TYPES.items()
        }

    def classify(self, action: Any) -> Tuple[ActionKind, Optional[Action]]:
        kind = _KIND_BY_TYPE.get(type(action))
        if kind is not None:
            return kind, action

        if isinstance(action, Mapping):
            kind = self._kind_for_tag(action.get("kind"))
            if kind is None:
                return ActionKind.UNKNOWN, None
            return kind, msgspec.convert(action, ACTION_TYPES[kind])

        if isinstance(action, (msgspec.Raw, bytes, bytearray, memoryview, str)):
            kind = self._kind_for_tag(self._tag_decoder.decode(action).kind)
            if kind is None:
                return ActionKind.UNKNOWN, None
            return kind, self._decoders[kind].decode(action)

        raise TypeError(f"Cannot classify action of type {type(action).__name__}")

    @staticmethod
    def _kind_for_tag(tag: Any) -> Optional[ActionKind]:
        return _KIND_BY_TAG.get(tag) if isinstance(tag, str) else None


_default_decoder = ActionDecoder()


def classify(action: Any) -> Tuple[ActionKind, Optional[Action]]:
    return _default_decoder.classify(action)
