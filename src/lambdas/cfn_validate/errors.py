# src/lambdas/cfn_validate/errors.py


class CfnValidateError(Exception):
    """Base class for every failure the handler turns into a job failure."""


class InvalidEventError(CfnValidateError):
    pass


class ArtifactDownloadError(CfnValidateError):
    pass


class ArchiveError(CfnValidateError):
    pass


class TemplateNotFoundError(CfnValidateError):
    pass


class TemplateValidationError(CfnValidateError):
    pass
