class ULIDException(Exception):
    pass


class InvalidLength(ULIDException):
    pass


class InvalidCharacter(ULIDException):
    def __init__(self, position: int, character: str):
        self.position = position
        self.character = character
        super().__init__(f'Invalid Character {character!r} At Position {position}')
