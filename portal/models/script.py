"""NirmaanTech Portal - Call scripts shown to agents during a call"""

from typing import List

from pydantic import BaseModel


GENERAL_SCRIPT_CATEGORY = "General"


class SubScript(BaseModel):
    title: str
    script: str


class CentralScript(BaseModel):
    id: int
    category: str
    main_script: str
    sub_scripts: List[SubScript] = []
    assigned_roles: List[str] = []


class ScriptSave(BaseModel):
    category: str
    main_script: str
    sub_scripts: List[SubScript] = []
    assigned_roles: List[str] = []
