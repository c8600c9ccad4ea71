"""Identifiers of the icons, bitmaps and sounds used by the game."""

from enum import IntEnum


class IconId(IntEnum):
    """Icon resources, numbered 1000-1999."""

    DOTF = 1000
    DOTF_SM = 1001


class BitmapId(IntEnum):
    """Bitmap resources, numbered 2000-2999."""

    MENU_TITLE = 2001
    MENU_STAR = 2002
    MENU_ROBOT = 2003
    MONSTER = 2004
    ENEMY_BASE = 2006
    BULLET = 2007
    BOSS_1 = 2008
    WALL_1 = 2010
    WALL_2 = 2011
    WALL_3 = 2012
    ROBOT_1_WALK = 2013
    ROBOT_1_FIRE = 2014
    DEMON_BULLET = 2015
    EXPLOSION = 2016
    DEMON_1 = 2017
    DEMON_1_EXPLODE = 2018


class SoundId(IntEnum):
    """Wave sound resources, numbered 3000-3999."""

    MENU_CLICK = 3000
    MENU_CLICK_BACK = 3001
    MENU_SELECT = 3002
    ROBOT_FIRE = 3003
    GUN_SHOT = 3004
    EXPLOSION = 3005
    DEMON_DIE_1 = 3006
    DEMON_DIE_2 = 3007
    CAPTAIN_2 = 3008
    HEAL = 3009
    CONSTROBOT_1 = 3010
    DEMON_FIRE = 3011