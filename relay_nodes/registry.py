import importlib
import logging
import pkgutil
from typing import Dict, List, Optional

from .errors import UnsupportedAction
from .schema import ProviderSpec


log = logging.getLogger("relay.nodes")

_PROVIDERS: Dict[str, ProviderSpec] = {}
_LOADED = False

PLUGIN_PACKAGE = "relay_nodes.plugins"


def install_provider(spec: ProviderSpec) -> None:
    _PROVIDERS[spec.name] = spec


def _load_plugins() -> None:
    global _LOADED
    if _LOADED:
        return
    package = importlib.import_module(PLUGIN_PACKAGE)
    for _, name, _ in pkgutil.iter_modules(package.__path__, PLUGIN_PACKAGE + "."):
        mod = importlib.import_module(name)
        spec = getattr(mod, "PROVIDER", None)
        if isinstance(spec, ProviderSpec):
            install_provider(spec)
        else:
            log.debug("plugin module %s exposes no PROVIDER", name)
    _LOADED = True


def providers() -> Dict[str, ProviderSpec]:
    _load_plugins()
    return dict(_PROVIDERS)


def get_provider(name: str) -> ProviderSpec:
    _load_plugins()
    spec = _PROVIDERS.get(name)
    if spec is None:
        raise UnsupportedAction(f"Unsupported provider: {name}")
    return spec


def required_keys(spec: ProviderSpec, action: str) -> List[str]:
    keys = [spec.auth.credential, *spec.required]
    act = spec.actions[action]
    if act.auth and act.auth.credential not in keys:
        keys.append(act.auth.credential)
    keys += [k for k in act.required if k not in keys]
    return keys


def list_nodes(category: Optional[str] = None) -> List[dict]:
    out: List[dict] = []
    for spec in providers().values():
        if category and category.lower() not in (spec.name, spec.title.lower()):
            continue
        for action_name, action in spec.actions.items():
            d = {
                "name": spec.qualified(action_name),
                "provider": spec.name,
                "action": action_name,
                "title": action.title,
                "category": spec.title,
                "required_keys": required_keys(spec, action_name),
            }
            doc = action.doc or spec.doc
            if doc:
                d["doc"] = doc
            out.append(d)
    return out
