import pytest

def u16(x):
    return x & 0xFFFF

def sign_extend(x, bits):
    sign_bit = 1 << (bits - 1)
    return ((x & ((1 << bits) - 1)) ^ sign_bit) - sign_bit

def bits_of(value, hi, lo):
    """Bits value[hi..lo], del más alto al más bajo."""
    return tuple((value >> b) & 1 for b in range(hi, lo - 1, -1))

class HackCPU:
    """Simulador mínimo de la CPU Hack para comprobar código generado."""

    def __init__(self, words, ram=None):
        self.rom = [int(w, 2) for w in words]
        self.ram = [0] * 32768
        for addr, val in (ram or {}).items():
            self.ram[addr] = u16(val)
        self.a = self.d = self.pc = 0

    def _alu(self, x, y, zx, nx, zy, ny, f, no):
        if zx: x = 0
        if nx: x = u16(~x)
        if zy: y = 0
        if ny: y = u16(~y)
        out = u16(x + y) if f else x & y
        return u16(~out) if no else out

    def step(self):
        ins = self.rom[self.pc]
        if not ins >> 15:
            self.a = ins
            self.pc += 1
            return
        a, c1, c2, c3, c4, c5, c6, d1, d2, d3, j1, j2, j3 = bits_of(ins, 12, 0)
        y = self.ram[self.a] if a else self.a
        out = self._alu(self.d, y, c1, c2, c3, c4, c5, c6)
        addr = self.a
        if d3: self.ram[addr] = out
        if d1: self.a = out
        if d2: self.d = out
        s = sign_extend(out, 16)
        jump = (j1 and s < 0) or (j2 and s == 0) or (j3 and s > 0)
        self.pc = addr if jump else self.pc + 1

    def run(self, max_steps=10000):
        steps = 0
        while self.pc < len(self.rom) and steps < max_steps:
            self.step()
            steps += 1
        return self

@pytest.fixture
def hack_cpu():
    return HackCPU
