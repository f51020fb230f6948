"""Mermaid diagram generation for gate trees."""

from doors.gate import Gate
from doors.lock import LockKind


class MermaidDiagramGenerator:
    """
    Generator for Mermaid flowchart diagrams of nested gates.

    Every gate and every plain key becomes a node; edges run from a gate to
    each of its locks. Nodes are styled by state: ``held`` for locked keys and
    closed gates, ``open`` for released keys and open gates.
    """

    def __init__(self):
        """Initialize Mermaid generator."""
        self.gate_counter = 0
        self.key_counter = 0

    def generate_gate_diagram(self, gate: Gate, fenced: bool = True) -> str:
        """
        Generate a Mermaid flowchart for ``gate`` and everything nested in it.

        Args:
            gate: Root gate to visualize
            fenced: Whether to wrap the diagram in a ```mermaid code fence

        Returns:
            Mermaid markdown string
        """
        self.gate_counter = 0
        self.key_counter = 0

        lines = []
        if fenced:
            lines.append("```mermaid")
        lines.append("flowchart TD")

        root_id = self._next_gate_id()
        root_state = "open" if gate.is_open else "held"
        lines.append(f"    {root_id}{self._gate_shape(gate)}:::{root_state}")
        self._add_locks(gate, root_id, lines)

        lines.append("")
        lines.append("    classDef held fill:#fde2e1,stroke:#c0392b,color:#000")
        lines.append("    classDef open fill:#e1f5e4,stroke:#27ae60,color:#000")

        if fenced:
            lines.append("```")
        return "\n".join(lines)

    def _add_locks(self, gate: Gate, gate_id: str, lines: list[str]) -> None:
        for key in gate.keys:
            target = gate.locks[key]
            state = "held" if gate.has(key) else "open"
            if target.kind is LockKind.GATE:
                child_id = self._next_gate_id()
                lines.append(f"    {child_id}{self._gate_shape(target.gate)}:::{state}")
                lines.append(f"    {gate_id} --> {child_id}")
                self._add_locks(target.gate, child_id, lines)
            else:
                key_id = self._next_key_id()
                lines.append(f'    {key_id}(["{self._escape(key)}"]):::{state}')
                lines.append(f"    {gate_id} --> {key_id}")

    def _gate_shape(self, gate: Gate) -> str:
        status = "open" if gate.is_open else f"{len(gate.held)}/{len(gate)} held"
        return f'["{self._escape(gate.name)}<br/>{status}"]'

    def _next_gate_id(self) -> str:
        node_id = f"G{self.gate_counter}"
        self.gate_counter += 1
        return node_id

    def _next_key_id(self) -> str:
        node_id = f"K{self.key_counter}"
        self.key_counter += 1
        return node_id

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace('"', "#quot;")
