class RepoError(Exception):
    """Base class for repository-level errors."""

    pass


# ------------------------- WORKOUT -------------------------


class WorkoutRepoError(RepoError):
    """Generic workout repository error."""

    pass
