"""Core: configuración, dominio, contratos y traducción de esquema."""
