"""Live-interval analysis and linear-scan register allocation."""