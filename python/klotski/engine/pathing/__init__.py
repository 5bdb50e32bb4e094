from klotski.engine.pathing.resolver import PathSegment, nearest_reachable, resolve_path

__all__ = ["PathSegment", "nearest_reachable", "resolve_path"]
