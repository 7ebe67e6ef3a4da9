import pygame

from camera import update_camera, world_to_screen


def test_camera_follows_and_clamps():
    cam = pygame.Vector2(0, 0)
    update_camera(cam, 2000, 1500, 1000, 750, 800, 600)
    assert (cam.x, cam.y) == (600, 450)
    update_camera(cam, 2000, 1500, 50, 50, 800, 600)
    assert (cam.x, cam.y) == (0, 0)
    update_camera(cam, 2000, 1500, 1990, 1490, 800, 600)
    assert (cam.x, cam.y) == (1200, 900)


def test_small_maze_is_centred():
    cam = pygame.Vector2(0, 0)
    update_camera(cam, 200, 100, 100, 50, 800, 600)
    assert (cam.x, cam.y) == (-300, -250)
    assert world_to_screen(0, 0, cam) == (300, 250)
