"""Adjacency-list graphs, graph-based image segmentation and the Image Foresting Transform."""

__version__ = "0.1.0"