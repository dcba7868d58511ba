from lcl_quote.ports.directory import Port, load_port_directory
from lcl_quote.ports.search import search

__all__ = ["Port", "load_port_directory", "search"]
