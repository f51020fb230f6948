"""Visualization of gate trees."""

from doors.visualization.mermaid import MermaidDiagramGenerator

__all__ = ["MermaidDiagramGenerator"]
