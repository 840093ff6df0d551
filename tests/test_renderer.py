"""Tests for Renderer class."""

import pytest
import os
import numpy as np

from bouncetracer.vec3 import Point3, Color
from bouncetracer.ray import SKY_COLOR
from bouncetracer.shapes import Sphere, Floor, Scene
from bouncetracer.materials import Diffuse, DiffusedLightSource
from bouncetracer.renderer import Renderer, RenderSettings, render, to_image, to_rgba8


def diffuse_scene() -> Scene:
    return Scene([
        Sphere(Point3(0, 3, 0), 0.5, Diffuse(Color(0.7, 0.7, 0.7))),
        Floor(1.5, Diffuse(Color(0.6, 0.6, 0.6)), upwards=False),
    ])


class TestRenderSettings:
    """Test RenderSettings configuration."""

    def test_default_values(self):
        settings = RenderSettings()
        assert settings.width == 512
        assert settings.height == 512
        assert settings.samples_per_pixel == 256
        assert settings.max_depth == 1000
        assert settings.seed is None

    def test_auto_thread_detection(self):
        settings = RenderSettings(num_threads=0)
        assert settings.num_threads == (os.cpu_count() or 4)

    def test_pixel_count(self):
        assert RenderSettings(width=4, height=3).pixel_count == 12

    @pytest.mark.parametrize("kwargs", [
        {'width': 0}, {'height': -1}, {'samples_per_pixel': 0},
        {'max_depth': 0}, {'num_threads': -2}, {'width': 2.5},
        {'width': True}, {'samples_per_pixel': True}, {'num_threads': 2.5},
        {'num_threads': False},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_numpy_integers_accepted(self):
        settings = RenderSettings(
            width=np.int64(4), height=np.int32(3), samples_per_pixel=np.int64(2),
            max_depth=np.int64(5), num_threads=np.int64(1)
        )
        assert settings.pixel_count == 12
        assert type(settings.width) is int
        assert type(settings.num_threads) is int


class TestRendererBasic:
    """Test basic renderer functionality."""

    def test_render_produces_flat_buffer(self):
        settings = RenderSettings(width=8, height=6, samples_per_pixel=1, max_depth=4, num_threads=1, seed=0)
        pixels = Renderer(settings).render(diffuse_scene())
        assert pixels.shape == (48, 3)
        assert pixels.dtype == np.float64
        assert np.all(np.isfinite(pixels))

    def test_empty_scene_is_sky(self):
        settings = RenderSettings(width=6, height=6, samples_per_pixel=2, max_depth=4, num_threads=1, seed=0)
        pixels = Renderer(settings).render(Scene())
        assert np.allclose(pixels, SKY_COLOR.to_array())

    def test_light_filling_the_view(self):
        emission = Color(0.9, 0.5, 0.2)
        scene = Scene([Sphere(Point3(0, 10, 0), 8.0, DiffusedLightSource(emission))])
        settings = RenderSettings(width=5, height=5, samples_per_pixel=3, max_depth=4, num_threads=1, seed=0)
        pixels = Renderer(settings).render(scene)
        assert np.allclose(pixels, emission.to_array(), rtol=0, atol=1e-12)

    def test_row_order_top_to_bottom(self):
        # Only the lower half of the view sees the floor
        scene = Scene([Floor(-0.5, Diffuse(Color(0.1, 0.1, 0.1)))])
        settings = RenderSettings(width=4, height=8, samples_per_pixel=2, max_depth=4, num_threads=1, seed=0)
        image = to_image(Renderer(settings).render(scene), 4, 8)
        assert np.allclose(image[0], SKY_COLOR.to_array())
        assert np.all(image[-1] < image[0])

    def test_module_level_render_accepts_list(self):
        objects = [Sphere(Point3(0, 3, 0), 0.5, Diffuse(Color(0.7, 0.7, 0.7)))]
        pixels = render(objects, 4, 4, 1, 4, seed=1, num_threads=1)
        assert pixels.shape == (16, 3)


class TestRendererDeterminism:
    """Test seed control."""

    def test_fixed_seed_is_bit_identical(self):
        a = render(diffuse_scene(), 8, 8, 4, 8, seed=42, num_threads=1)
        b = render(diffuse_scene(), 8, 8, 4, 8, seed=42, num_threads=1)
        assert np.array_equal(a, b)

    def test_fixed_seed_is_bit_identical_with_threads(self):
        a = render(diffuse_scene(), 8, 8, 5, 8, seed=7, num_threads=3)
        b = render(diffuse_scene(), 8, 8, 5, 8, seed=7, num_threads=3)
        assert np.array_equal(a, b)

    def test_different_seeds_differ(self):
        a = render(diffuse_scene(), 8, 8, 2, 8, seed=1, num_threads=1)
        b = render(diffuse_scene(), 8, 8, 2, 8, seed=2, num_threads=1)
        assert not np.array_equal(a, b)


class TestRendererThreads:
    """Test multi-threaded sample splitting."""

    def test_split_samples(self):
        assert Renderer._split_samples(10, 3) == [4, 3, 3]
        assert Renderer._split_samples(4, 4) == [1, 1, 1, 1]
        assert sum(Renderer._split_samples(257, 8)) == 257

    def test_threads_capped_by_samples(self):
        settings = RenderSettings(width=4, height=4, samples_per_pixel=2, max_depth=4, num_threads=8, seed=0)
        pixels = Renderer(settings).render(Scene())
        assert np.allclose(pixels, SKY_COLOR.to_array())

    def test_threaded_merge_matches_constant_scene(self):
        emission = Color(0.3, 0.6, 0.9)
        scene = Scene([Sphere(Point3(0, 10, 0), 8.0, DiffusedLightSource(emission))])
        settings = RenderSettings(width=4, height=4, samples_per_pixel=7, max_depth=4, num_threads=3, seed=0)
        pixels = Renderer(settings).render(scene)
        assert np.allclose(pixels, emission.to_array())


class TestRendererProgress:
    """Test renderer progress reporting."""

    @pytest.mark.parametrize("threads", [1, 2])
    def test_progress_callback(self, threads):
        settings = RenderSettings(width=3, height=4, samples_per_pixel=2, max_depth=2, num_threads=threads, seed=0)
        renderer = Renderer(settings)
        seen = []
        renderer.set_progress_callback(seen.append)
        renderer.render(Scene())

        assert len(seen) == 8
        assert seen == sorted(seen)
        assert seen[-1] == pytest.approx(1.0)


class TestOutputConversion:
    """Test gamma correction and 8-bit conversion."""

    def test_rgba8_values(self):
        buffer = np.array([[0.0, 0.25, 1.0], [4.0, -1.0, 0.5]])
        rgba = to_rgba8(buffer, 2, 1)
        assert rgba.shape == (1, 2, 4)
        assert rgba.dtype == np.uint8
        assert list(rgba[0, 0]) == [0, 128, 255, 255]
        assert list(rgba[0, 1]) == [255, 0, 181, 255]

    def test_to_image_layout(self):
        buffer = np.arange(18, dtype=np.float64).reshape(6, 3)
        image = to_image(buffer, 3, 2)
        # Pixel (x=2, y=1) lives at flat index 1 * 3 + 2
        assert np.array_equal(image[1, 2], buffer[5])


class TestEndToEnd:
    """Render a small scene and check its overall shape."""

    def test_single_sphere_under_ceiling(self):
        width = height = 64
        pixels = render(diffuse_scene(), width, height, 16, 8, seed=2024, num_threads=1)

        assert pixels.shape == (width * height, 3)
        assert np.all(pixels >= 0.0)
        assert np.all(pixels <= 1.0)

        image = to_image(pixels, width, height)
        sphere = image[28:36, 28:36].reshape(-1, 3).mean(axis=0)
        # Bottom rows look down into empty space
        sky = image[-4:, :].reshape(-1, 3).mean(axis=0)

        assert np.allclose(sky, SKY_COLOR.to_array())
        assert np.all(sphere < sky - 0.05)
