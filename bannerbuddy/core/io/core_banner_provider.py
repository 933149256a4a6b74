"""Fournisseurs de données de bannières.

Le format d'échange reproduit la réponse de l'API GraphQL UI:
`data.uiapi.query.Banner_Buddy__c.edges[].node`, où `Id` est brut et
chaque autre champ est enveloppé dans `{"value": ...}`. Les erreurs
arrivent sous forme de liste structurée, jamais comme exception.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Protocol

from loguru import logger

from ..core_exceptions import BannerPayloadError
from ..models.core_banner_models import BannerRecord

BANNER_OBJECT: Final[str] = "Banner_Buddy__c"

# Champ source -> attribut de BannerRecord
NODE_FIELDS: Final[dict[str, str]] = {
    "Name": "name",
    "Start_Date__c": "start_date",
    "End_Date__c": "end_date",
    "Status__c": "status",
    "Variant__c": "variant",
    "Banner_Title__c": "title",
    "Banner_Description__c": "description",
    "Banner_Message__c": "message",
    "Links_To__c": "link_url",
}


@dataclass(frozen=True)
class FetchResult:
    """Résultat d'un fetch: enregistrements OU liste d'erreurs."""

    records: tuple[BannerRecord, ...] | None = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """True si des données (éventuellement vides) ont été obtenues."""
        return self.records is not None


class BannerProvider(Protocol):
    """Interface minimale d'une source de bannières."""

    def fetch(self) -> FetchResult:
        """Exécute la requête et retourne un résultat structuré."""


def _unwrap(wrapper: Any) -> Any:
    if isinstance(wrapper, Mapping):
        return wrapper.get("value")
    return None


def _error_messages(errors: Any) -> tuple[str, ...]:
    if not errors:
        return ()
    if not isinstance(errors, list):
        errors = [errors]
    messages = []
    for error in errors:
        if isinstance(error, Mapping):
            messages.append(str(error.get("message") or error))
        else:
            messages.append(str(error))
    return tuple(messages)


def parse_banner_node(node: Any, index: int = 0) -> BannerRecord:
    """Convertit un nœud GraphQL en BannerRecord.

    Raises:
        BannerPayloadError: si le nœud n'est pas un objet
    """
    if not isinstance(node, Mapping):
        raise BannerPayloadError("Nœud de bannière invalide", path=f"edges[{index}].node")

    banner_id = node.get("Id")
    values = {attr: _unwrap(node.get(source)) for source, attr in NODE_FIELDS.items()}
    return BannerRecord(id=str(banner_id) if banner_id is not None else None, **values)


def parse_banner_response(payload: Any) -> FetchResult:
    """Parse une réponse complète (`data` et/ou `errors`).

    Raises:
        BannerPayloadError: si `data` est présent mais mal structuré
    """
    if not isinstance(payload, Mapping):
        raise BannerPayloadError("La réponse doit être un objet JSON")

    data = payload.get("data")
    if not data:
        errors = _error_messages(payload.get("errors"))
        if not errors:
            raise BannerPayloadError("Réponse sans `data` ni `errors`")
        return FetchResult(errors=errors)

    path = "data"
    node: Any = data
    for key in ("uiapi", "query", BANNER_OBJECT, "edges"):
        path = f"{path}.{key}"
        if not isinstance(node, Mapping) or key not in node:
            raise BannerPayloadError("Structure de réponse inattendue", path=path)
        node = node[key]

    if not isinstance(node, list):
        raise BannerPayloadError("`edges` doit être une liste", path=path)

    records = []
    for index, edge in enumerate(node):
        if not isinstance(edge, Mapping):
            raise BannerPayloadError("Arête invalide", path=f"edges[{index}]")
        records.append(parse_banner_node(edge.get("node"), index))

    logger.debug(f"[parse_banner_response] {len(records)} bannière(s) lue(s)")
    return FetchResult(records=tuple(records))


def query_active_banners(records: Iterable[BannerRecord]) -> tuple[BannerRecord, ...]:
    """Applique le contrat de la requête: statut Active, date de début décroissante."""
    active = [record for record in records if record.is_active]
    return tuple(sorted(active, key=lambda record: record.start_date or "", reverse=True))


class StaticBannerProvider:
    """Fournisseur en mémoire (tests, démonstrations)."""

    def __init__(self, records: Iterable[BannerRecord]) -> None:
        """Initialise le fournisseur avec une liste d'enregistrements."""
        self._records = tuple(records)

    def fetch(self) -> FetchResult:
        """Retourne les enregistrements actifs triés."""
        return FetchResult(records=query_active_banners(self._records))


class JsonFileBannerProvider:
    """Fournisseur lisant une réponse GraphQL enregistrée dans un fichier JSON."""

    def __init__(self, path: str | Path) -> None:
        """Initialise le fournisseur.

        Args:
            path: Chemin du fichier de réponse
        """
        self.path = Path(path)

    def fetch(self) -> FetchResult:
        """Lit et parse le fichier; toute erreur devient un résultat d'erreur."""
        logger.debug(f"[JsonFileBannerProvider] Lecture de {self.path}")
        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError:
            logger.warning(f"[JsonFileBannerProvider] Fichier introuvable: {self.path}")
            return FetchResult(errors=(f"Fichier introuvable: {self.path}",))
        except json.JSONDecodeError as e:
            logger.warning(f"[JsonFileBannerProvider] Erreur JSON: {e}")
            return FetchResult(errors=(f"JSON invalide: {e}",))
        except OSError as e:
            logger.warning(f"[JsonFileBannerProvider] ERREUR de lecture: {e}")
            return FetchResult(errors=(f"Lecture impossible: {e}",))

        try:
            result = parse_banner_response(payload)
        except BannerPayloadError as e:
            logger.warning(f"[JsonFileBannerProvider] Payload invalide: {e}")
            return FetchResult(errors=(str(e),))

        if not result.ok:
            return result
        return FetchResult(records=query_active_banners(result.records or ()))
