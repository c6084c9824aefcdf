from sonix.adapters.repositories.file_account_repository import FileAccountRepository, read_lines

__all__ = ["FileAccountRepository", "read_lines"]
