from dataclasses import dataclass, fields


# Behaviour switches for instructions that historical interpreters disagree on.
# All off reproduces the original COSMAC VIP behaviour.
@dataclass(frozen=True)
class Quirks:
    bitshift_ignores_vy: bool = False             # 8xy6/8xyE shift Vx in place
    jump_with_offset_uses_vx: bool = False        # Bxnn jumps to nnn + Vx
    add_to_index_ignores_overflow: bool = False   # Fx1E leaves VF alone
    store_and_load_increment_index: bool = False  # Fx55/Fx65 bump I by x

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls)]

    def enabled(self):
        return [name for name in self.names() if getattr(self, name)]
