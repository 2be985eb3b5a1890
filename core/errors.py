# core/errors.py


class CatalogError(Exception):
    """
    Base class for every failure that can happen while loading a resource.
    `user_message` is the text shown in the UI; str(exc) is the diagnostic.
    """
    user_message = "データの読み込みに失敗しました"

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        if user_message is not None:
            self.user_message = user_message


class ResourceUnavailable(CatalogError):
    user_message = "データの読み込みに失敗しました"


class DecodeFailure(CatalogError):
    user_message = "データのデコードに失敗しました"


class CatalogFormatError(CatalogError):
    user_message = "JSONデータの解析に失敗しました"
