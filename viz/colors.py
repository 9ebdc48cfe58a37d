WHITE = (235, 235, 240)
GREY = (130, 130, 145)
CYAN = (80, 210, 230)
AMBER = (255, 190, 60)
RED = (230, 70, 60)
GREEN = (90, 210, 110)
GRID = (32, 32, 44)
