from pydantic import BaseModel


class Rectangle(BaseModel):
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def is_null(self) -> bool:
        return self.width == 0 and self.height == 0
