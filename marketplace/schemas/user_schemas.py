from pydantic import BaseModel


class ProfileImageResponse(BaseModel):
    message: str
    imageUrl: str


class MessageResponse(BaseModel):
    message: str
