from infrastructure.storage import StorageException, StorageFile, StorageInterface


class InMemoryStorage(StorageInterface):
    """Object storage double that keeps uploads in a dict."""

    base_url = "https://media.test"

    def __init__(self, fail_after=None):
        self.objects = {}
        self.fail_after = fail_after

    def upload(self, file, path, content_type):
        if self.fail_after is not None and len(self.objects) >= self.fail_after:
            raise StorageException("storage unavailable")
        data = file.read()
        self.objects[path] = data
        return StorageFile(key=path, url=self.get_url(path), size=len(data), content_type=content_type)

    def delete(self, key):
        return self.objects.pop(key, None) is not None

    def get_url(self, key):
        return f"{self.base_url}/{key}"

    def exists(self, key):
        return key in self.objects
