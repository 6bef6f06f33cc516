"""Three-address code instructions and their generation from syntax trees."""