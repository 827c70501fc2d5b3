"""Robot SDK data: leg and joint constants, joint limits and packed wire structures."""