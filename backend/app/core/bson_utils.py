# backend/app/core/bson_utils.py
# Helpers Pydantic v2 pour ObjectId + base model Mongo, avec JSON Schema propre pour OpenAPI.
from __future__ import annotations

from typing import Any, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic.json_schema import GetJsonSchemaHandler, JsonSchemaValue
from pydantic_core import core_schema


class PyObjectId(ObjectId):
    """ObjectId compatible Pydantic v2 et OpenAPI.

    Description:
        Étend `bson.ObjectId` avec les hooks Pydantic v2 pour:
        - accepter une chaîne hex de 24 caractères **ou** un `ObjectId`
        - sérialiser en chaîne dans les réponses
        - exposer un schéma OpenAPI clair (`type: string`, `format: objectid`)
    """

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_plain_validator_function(cls._validate),
            python_schema=core_schema.no_info_plain_validator_function(cls._validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema_obj: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "format": "objectid",
            "pattern": "^[a-fA-F0-9]{24}$",
            "examples": ["507f1f77bcf86cd799439011"],
        }

    @classmethod
    def _validate(cls, v: Any) -> ObjectId:
        """Valide et convertit en ObjectId.

        Raises:
            ValueError: Si la valeur n’est pas un ObjectId valide.
        """
        if isinstance(v, ObjectId):
            return v
        if isinstance(v, str) and ObjectId.is_valid(v):
            return ObjectId(v)
        raise ValueError(f"Invalid ObjectId: {v!r}")


# Identifiant de document : ObjectId en général, chaîne libre pour les documents importés.
DocId = Union[PyObjectId, str]


def as_doc_id(raw: Any) -> ObjectId | str:
    """Normalise un identifiant reçu de l'extérieur.

    Description:
        Une chaîne hex canonique de 24 caractères devient un `ObjectId`; toute autre
        valeur est conservée telle quelle (documents dont `_id` est une chaîne).

    Args:
        raw (Any): Identifiant brut (chemin d'URL, champ de document).

    Returns:
        ObjectId | str: Valeur utilisable dans un filtre `{"_id": ...}`.
    """
    if isinstance(raw, ObjectId):
        return raw
    raw = str(raw)
    if ObjectId.is_valid(raw) and str(ObjectId(raw)) == raw:
        return ObjectId(raw)
    return raw


class MongoBaseModel(BaseModel):
    """BaseModel Pydantic pour documents Mongo.

    Description:
        - Champ `_id` exposé via l’alias `_id` (ObjectId ou chaîne)
        - Config adaptée à Mongo (aliases, `arbitrary_types_allowed`)
    """

    id: Optional[DocId] = Field(default=None, alias="_id")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


def dump_mongo(model: BaseModel, *, exclude_none: bool = True) -> dict:
    """Dump d’un modèle pour Mongo (dict).

    Description:
        Sérialise en dict prêt pour Mongo, en respectant les alias (`_id`) et
        en excluant les champs `None` par défaut. Les ObjectId restent des ObjectId.

    Args:
        model (BaseModel): Modèle Pydantic à sérialiser.
        exclude_none (bool): Exclure les champs None.

    Returns:
        dict: Document sérialisé prêt à insérer/mettre à jour.
    """
    return model.model_dump(by_alias=True, exclude_none=exclude_none)
