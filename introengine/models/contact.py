from typing import Optional
from pydantic import Field
from introengine.models.base import IntroEngineModel, Identifier, StrList


class Contact(IntroEngineModel):
    """
    A person the account already knows.
    Every field beyond id and name is optional: the graph is sparse.
    """
    id: Identifier = Field(..., min_length=1)
    full_name: str
    email: Optional[str] = None
    company_id: Optional[Identifier] = None
    company_name: Optional[str] = None
    role_title: Optional[str] = None
    seniority: Optional[str] = None
    previous_companies: StrList = Field(default_factory=list)
    previous_roles: StrList = Field(default_factory=list)
    linkedin_url: Optional[str] = None
    # Ids of people this contact is known to be connected with
    connections: StrList = Field(default_factory=list)
    # Free-text interaction log (meeting notes, emails, comments)
    interactions: StrList = Field(default_factory=list)


class TargetContact(IntroEngineModel):
    """
    A decision-maker at a company of interest.
    Role, seniority and company are mandatory because scoring depends on them.
    """
    id: Identifier = Field(..., min_length=1)
    full_name: str
    role_title: str = Field(..., min_length=1)
    seniority: str = Field(..., min_length=1)
    company_id: Identifier = Field(..., min_length=1)
    email: Optional[str] = None
    previous_companies: StrList = Field(default_factory=list)
    previous_roles: StrList = Field(default_factory=list)
    linkedin_url: Optional[str] = None
    connections: StrList = Field(default_factory=list)
