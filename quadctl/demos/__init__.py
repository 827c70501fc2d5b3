"""Step-by-step demo controllers that map a received state to a command."""