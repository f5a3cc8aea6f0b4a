"""spring-scaffold -- Spring Boot 4 project generator."""

__version__ = "1.0.0"
