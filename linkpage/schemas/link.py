from pydantic import BaseModel, ConfigDict, Field

class Link(BaseModel):
    """Un lien sortant de la page (ordre de la liste = ordre d'affichage)"""
    id: int
    platform: str
    url: str = ""
    icon_key: str = Field("FaLink", alias="iconKey")
    # flag d'UI, jamais persisté
    is_editing: bool = Field(False, alias="isEditing", exclude=True)

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
