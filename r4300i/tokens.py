from typing import List


class Token:
    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return False
        return self.__dict__ == getattr(other, "__dict__", {})


def asm_str(parts: List[Token]) -> str:
    return "".join(str(part) for part in parts)


class TInstr(Token):
    def __init__(self, instr: str) -> None:
        self.instr = instr

    def __repr__(self) -> str:
        return f"TInstr({self.instr})"

    def __str__(self) -> str:
        return self.instr


class TSep(Token):
    def __init__(self, sep: str) -> None:
        self.sep = sep

    def __repr__(self) -> str:
        return f"TSep({self.sep})"

    def __str__(self) -> str:
        return self.sep


class TText(Token):
    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"TText({self.text})"

    def __str__(self) -> str:
        return self.text


class TInt(Token):
    """Unsigned literal rendered as 0x-prefixed, zero-padded uppercase hex."""

    def __init__(self, value: int, digits: int) -> None:
        self.value = value
        self.digits = digits

    def __repr__(self) -> str:
        return f"TInt({self.value:#x}, {self.digits})"

    def __str__(self) -> str:
        return f"0x{self.value:0{self.digits}X}"


class TReg(Token):
    def __init__(self, reg: str) -> None:
        self.reg = reg

    def __repr__(self) -> str:
        return f"TReg({self.reg})"

    def __str__(self) -> str:
        return self.reg
