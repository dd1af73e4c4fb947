from .gallery import (
    ArtworkRecord,
    GalleryStore,
    ArtworkStoreError,
    ArtworkNotFoundError,
    GalleryFullError,
    StorageError,
    GALLERY_LIMIT,
)
