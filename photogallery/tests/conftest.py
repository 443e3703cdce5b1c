"""
Pytest fixtures for photogallery tests.
"""

import pytest


@pytest.fixture
def make_image(tmp_path):
    """Fixture providing a factory that writes a test image and returns its path."""
    from PIL import Image

    src_dir = tmp_path / 'src'
    src_dir.mkdir(exist_ok=True)

    def _make(name, size=(640, 480), color='red', mode='RGB', **save_kwargs):
        path = src_dir / name
        img = Image.new(mode, size, color=color)
        img.save(path, **save_kwargs)
        return str(path)

    return _make


@pytest.fixture
def corrupt_image(tmp_path):
    """Fixture providing a .jpg file whose body is not an image."""
    src_dir = tmp_path / 'src'
    src_dir.mkdir(exist_ok=True)
    path = src_dir / 'broken.jpg'
    path.write_bytes(b'not an image at all')
    return str(path)


@pytest.fixture
def output_dir(tmp_path):
    """Fixture providing a gallery output folder path (not yet created)."""
    return str(tmp_path / 'gallery')


@pytest.fixture
def images_dir(output_dir):
    """Fixture providing an output folder with its images/ subfolder created."""
    import os

    path = os.path.join(output_dir, 'images')
    os.makedirs(path)
    return path


@pytest.fixture
def gallery_config(output_dir):
    """Fixture providing a small gallery configuration."""
    from photogallery.gallery_config import GalleryConfig

    return GalleryConfig(
        output_path=output_dir,
        title='Test Gallery',
        columns=3,
        thumbnail_size=100,
        full_size=400,
        quality=80,
    )


@pytest.fixture
def three_jpegs(make_image):
    """Fixture providing descriptors for three valid JPEGs."""
    from photogallery.asset_descriptor import AssetDescriptor

    return [
        AssetDescriptor(path=make_image('first.jpg', size=(800, 600), color='red'), title='First'),
        AssetDescriptor(path=make_image('second.jpg', size=(600, 800), color='green'), title='Second'),
        AssetDescriptor(path=make_image('third.jpg', size=(300, 300), color='blue'), title='Third'),
    ]


@pytest.fixture
def mixed_batch(make_image, corrupt_image):
    """Fixture providing two valid descriptors with a corrupt one in between."""
    from photogallery.asset_descriptor import AssetDescriptor

    return [
        AssetDescriptor(path=make_image('one.jpg', size=(500, 400)), title='One'),
        AssetDescriptor(path=corrupt_image, title='Broken'),
        AssetDescriptor(path=make_image('two.png', size=(400, 500)), title='Two'),
    ]


@pytest.fixture
def sample_processed_images():
    """Fixture providing processed image records (no files on disk)."""
    from photogallery.asset_descriptor import AssetDescriptor
    from photogallery.processed_image import ProcessedImage, Rendition

    first = ProcessedImage(
        source=AssetDescriptor(
            path='/photos/harbour.jpg',
            title='Harbour <at> dawn',
            description='Boats & "fog"',
        ),
        full=Rendition('images/harbour_full.jpg', 1600, 1067, 250000),
        thumbnail=Rendition('images/harbour_thumb.jpg', 300, 200, 12000),
        index=0,
    )
    second = ProcessedImage(
        source=AssetDescriptor(path='/photos/pier.jpg'),
        full=Rendition('images/pier_full.jpg', 1067, 1600, 240000),
        thumbnail=Rendition('images/pier_thumb.jpg', 200, 300, 11000),
        index=2,
    )
    return [first, second]


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    import logging
    return logging.getLogger('test')
