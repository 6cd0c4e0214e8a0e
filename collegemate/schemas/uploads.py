from pydantic import BaseModel, Field


class StudyUpload(BaseModel):
    """Study material link shared by a student"""
    id: int  # Creation time in epoch milliseconds
    semester: str
    subject: str
    name: str
    file: str = Field(..., description="Drive/Dropbox link to the material")
    is_custom: bool = True
