"""Small pixel-window toolkit: displays, windows, images, event hooks, colour names and XPM reading."""