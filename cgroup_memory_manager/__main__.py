from cgroup_memory_manager.agent import main

if __name__ == "__main__":
    main()
