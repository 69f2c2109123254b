from .commentary_service import CommentaryService, CommentaryServiceError

__all__ = ["CommentaryService", "CommentaryServiceError"]
